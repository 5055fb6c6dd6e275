from .catalog import WorkoutViewSet
from .scheduled import ScheduledWorkoutViewSet
from .dashboard import DashboardView

__all__ = [
    'WorkoutViewSet',
    'ScheduledWorkoutViewSet',
    'DashboardView',
]
