from .fields import WorkoutDataField
from .catalog import WorkoutSerializer
from .scheduled import ScheduledWorkoutSerializer, ScheduledWorkoutCreateSerializer

__all__ = [
    'WorkoutDataField',
    # Каталог
    'WorkoutSerializer',
    # Журнал
    'ScheduledWorkoutSerializer',
    'ScheduledWorkoutCreateSerializer',
]
