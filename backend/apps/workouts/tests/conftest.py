import pytest

from apps.workouts.models import ScheduledWorkout, Workout


@pytest.fixture
def public_workout(db):
    """Тренировка системного каталога."""
    return Workout.objects.create(
        name='Приседания',
        category='strength',
        equipment='barbell',
        description='Ноги',
        instructions='Присесть до параллели',
        workout_data={'type': 'strength', 'sets': 4, 'reps': 8},
    )


@pytest.fixture
def own_private_workout(user):
    return Workout.objects.create(
        name='Моя растяжка',
        category='flexibility',
        workout_data={'type': 'flexibility', 'duration_seconds': 30},
        created_by=user,
        is_public=False,
    )


@pytest.fixture
def foreign_private_workout(another_user):
    return Workout.objects.create(
        name='Чужая тренировка',
        category='cardio',
        workout_data={'type': 'cardio'},
        created_by=another_user,
        is_public=False,
    )


@pytest.fixture
def scheduled_workout(user, public_workout):
    return ScheduledWorkout.objects.create(
        user=user,
        workout=public_workout,
        completed_workout_data={'name': 'Приседания', 'workout_data': {'type': 'strength'}},
    )
