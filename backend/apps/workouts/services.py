from __future__ import annotations

import copy
from datetime import date, timedelta
from typing import TYPE_CHECKING

from django.db.models import Count, Q, QuerySet
from django.utils import timezone

from .exceptions import WorkoutNotFound
from .models import ScheduledWorkout, Workout

if TYPE_CHECKING:
    from apps.accounts.models import User


SNAPSHOT_FIELDS = ('name', 'category', 'equipment', 'description', 'instructions')

RECENT_WORKOUTS_LIMIT = 5


def build_workout_snapshot(workout: Workout, workout_data: dict | None = None) -> dict:
    """
    Снимок тренировки для журнала.

    Args:
        workout: Тренировка каталога
        workout_data: Параметры, заменяющие параметры тренировки
            (например, data_override слота плана). None — берутся из тренировки.

    Returns:
        Независимая копия данных тренировки
    """
    snapshot = {field: getattr(workout, field) for field in SNAPSHOT_FIELDS}
    effective = workout_data if workout_data is not None else workout.workout_data
    snapshot['workout_data'] = copy.deepcopy(effective) if effective is not None else {}
    return snapshot


def visible_workouts(user: User | None) -> QuerySet[Workout]:
    """Публичные тренировки и собственные тренировки пользователя."""
    qs = Workout.objects.all()
    if user is not None and user.is_authenticated:
        return qs.filter(Q(is_public=True) | Q(created_by=user))
    return qs.filter(is_public=True)


def get_visible_workout(workout_id: int, user: User) -> Workout:
    try:
        return visible_workouts(user).get(pk=workout_id)
    except Workout.DoesNotExist:
        raise WorkoutNotFound(workout_id)


def create_scheduled_workout(
    user: User,
    workout_id: int,
    *,
    completed_workout_data: dict | None = None,
    performed_at: date | None = None,
    notes: str = '',
    completion_state: str = 'pending',
) -> ScheduledWorkout:
    """
    Создаёт запись в журнале вручную (вне плана).

    Если снимок не передан, он строится из текущего состояния тренировки.

    Raises:
        WorkoutNotFound: тренировка не существует или недоступна
    """
    workout = get_visible_workout(workout_id, user)
    if completed_workout_data is None:
        completed_workout_data = build_workout_snapshot(workout)

    return ScheduledWorkout.objects.create(
        user=user,
        workout=workout,
        completed_workout_data=completed_workout_data,
        performed_at=performed_at or timezone.localdate(),
        notes=notes,
        completion_state=completion_state,
    )


def get_workout_stats(user: User, days: int, today: date | None = None) -> dict:
    """
    Агрегаты журнала за последние ``days`` дней (включая сегодня).

    Будущие записи, сгенерированные из планов, не учитываются.
    """
    today = today or timezone.localdate()
    since = today - timedelta(days=days - 1)

    stats = ScheduledWorkout.objects.filter(
        user=user,
        performed_at__gte=since,
        performed_at__lte=today,
    ).aggregate(
        total_workouts=Count('id'),
        workout_days=Count('performed_at', distinct=True),
        unique_workouts=Count('workout', distinct=True),
    )
    return stats


def get_dashboard(user: User, days: int = 30) -> dict:
    """Сводка для главного экрана."""
    stats = get_workout_stats(user, days)
    total = stats['total_workouts']
    workout_days = stats['workout_days']

    recent = list(
        ScheduledWorkout.objects.filter(user=user).order_by('-performed_at', '-id')[:RECENT_WORKOUTS_LIMIT]
    )

    return {
        'period_days': days,
        'stats': {
            **stats,
            'workout_frequency_percent': round(workout_days / days * 100, 1),
            'available_workouts': Workout.objects.filter(is_public=True).count(),
        },
        'recent_workouts': recent,
        'summary': {
            'message': (
                f'За последние {days} дн. выполнено тренировок: {total}, '
                f'дней с тренировками: {workout_days}.'
            ),
            'avg_workouts_per_day': round(total / days, 2),
        },
    }
