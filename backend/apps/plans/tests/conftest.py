from datetime import date

import pytest

from apps.plans.models import Plan, PlanWorkout
from apps.workouts.models import Workout


# ============================================================================
# Каталог
# ============================================================================

@pytest.fixture
def bench_press(db):
    return Workout.objects.create(
        name='Жим лёжа',
        category='strength',
        equipment='barbell',
        description='Грудь',
        instructions='Опустить штангу к груди и выжать',
        workout_data={'type': 'strength', 'sets': 3, 'reps': 10, 'weight_kg': 60},
    )


@pytest.fixture
def treadmill_run(db):
    return Workout.objects.create(
        name='Бег',
        category='cardio',
        equipment='treadmill',
        workout_data={'type': 'cardio', 'duration_minutes': 30},
    )


# ============================================================================
# Планы
# ============================================================================

@pytest.fixture
def plan(user, bench_press, treadmill_run):
    """Публичный план на 4 недели: 3 слота в первую неделю, 1 во вторую."""
    plan = Plan.objects.create(
        name='Базовая сила',
        description='Четыре недели',
        duration_weeks=4,
        created_by=user,
    )
    PlanWorkout.objects.create(plan=plan, workout=bench_press, week_offset=0, week_day=1, order=0)
    PlanWorkout.objects.create(
        plan=plan, workout=bench_press, week_offset=0, week_day=3, order=0,
        data_override={'type': 'strength', 'sets': 5, 'reps': 5},
    )
    PlanWorkout.objects.create(plan=plan, workout=treadmill_run, week_offset=0, week_day=3, order=1)
    PlanWorkout.objects.create(plan=plan, workout=treadmill_run, week_offset=1, week_day=5, order=0)
    return plan


@pytest.fixture
def private_plan(another_user, bench_press):
    """Приватный план другого пользователя."""
    plan = Plan.objects.create(
        name='Секретный план',
        duration_weeks=2,
        created_by=another_user,
        is_public=False,
    )
    PlanWorkout.objects.create(plan=plan, workout=bench_press, week_offset=0, week_day=2)
    return plan


@pytest.fixture
def monday():
    """2024-01-01 — понедельник."""
    return date(2024, 1, 1)


@pytest.fixture
def strangers_workout(another_user):
    """Приватная тренировка другого пользователя."""
    return Workout.objects.create(
        name='Секретная программа',
        category='strength',
        description='Только для автора',
        workout_data={'type': 'strength', 'sets': 10},
        created_by=another_user,
        is_public=False,
    )
