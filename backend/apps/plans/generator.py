"""
Генерация расписания тренировок из шаблона плана.

Чистая функция: на вход подписка, слоты плана и функция поиска
тренировки, на выход список черновиков записей журнала. К базе данных
модуль не обращается.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Callable, Iterable, Optional, Protocol

from apps.workouts.services import build_workout_snapshot


class SlotLike(Protocol):
    id: int
    workout_id: int
    week_day: int
    week_offset: int
    order: int
    data_override: Optional[dict]


class SubscriptionLike(Protocol):
    id: int
    user_id: int
    plan_id: Optional[int]
    start_date: date


@dataclass(frozen=True)
class ScheduledWorkoutDraft:
    """Будущая запись журнала. Имена полей совпадают с полями ScheduledWorkout."""

    user_id: int
    workout_id: int
    completed_workout_data: dict
    performed_at: date
    plan_id: Optional[int]
    subscription_id: int
    plan_workout_id: int


def sunday_weekday(day: date) -> int:
    """День недели с воскресеньем = 0 (как week_day слота)."""
    return day.isoweekday() % 7


def slot_date(start_date: date, week_offset: int, week_day: int) -> date:
    """
    Дата тренировки для слота.

    Берётся неделя week_offset от даты старта, затем дата сдвигается к
    нужному дню недели внутри той же недели (воскресенье — её начало).
    Сдвиг может быть отрицательным: слот на воскресенье при старте в
    понедельник попадёт на день раньше старта.
    """
    candidate = start_date + timedelta(days=week_offset * 7)
    return candidate + timedelta(days=week_day - sunday_weekday(candidate))


def _slot_sort_key(slot: SlotLike) -> tuple:
    return (slot.week_offset, slot.week_day, slot.order, slot.id)


def generate_schedule(
    subscription: SubscriptionLike,
    slots: Iterable[SlotLike],
    find_workout: Callable[[int], Any],
) -> list[ScheduledWorkoutDraft]:
    """
    Разворачивает слоты плана в датированные черновики записей.

    Args:
        subscription: Подписка (user_id, plan_id, id, start_date)
        slots: Слоты плана
        find_workout: Поиск тренировки по id, None если её нет

    Returns:
        Черновики в порядке (week_offset, week_day, order). Слоты, чья
        тренировка не найдена, пропускаются.
    """
    drafts = []
    for slot in sorted(slots, key=_slot_sort_key):
        workout = find_workout(slot.workout_id)
        if workout is None:
            continue

        drafts.append(ScheduledWorkoutDraft(
            user_id=subscription.user_id,
            workout_id=slot.workout_id,
            completed_workout_data=build_workout_snapshot(workout, slot.data_override),
            performed_at=slot_date(subscription.start_date, slot.week_offset, slot.week_day),
            plan_id=subscription.plan_id,
            subscription_id=subscription.id,
            plan_workout_id=slot.id,
        ))
    return drafts
