from core.exceptions import NotFoundError


class WorkoutNotFound(NotFoundError):
    default_message = 'Тренировка не найдена'

    def __init__(self, workout_id=None):
        message = f'Тренировка {workout_id} не найдена' if workout_id is not None else None
        super().__init__(message)
