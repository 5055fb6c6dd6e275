from .catalog import Workout
from .scheduled import ScheduledWorkout

__all__ = [
    # Каталог
    'Workout',
    # Журнал тренировок
    'ScheduledWorkout',
]
