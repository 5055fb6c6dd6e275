"""
Сервисы планов: хранилище шаблонов и жизненный цикл подписок.

Каждая операция подписки (subscribe, unsubscribe, regenerate,
reschedule, update_status) выполняется в одной транзакции. Ошибка
записи откатывает всё, включая даты подписки.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Iterable

from django.db import IntegrityError, transaction
from django.db.models import Q, QuerySet

from apps.workouts.models import ScheduledWorkout, Workout

from .exceptions import AlreadySubscribed, PlanNotFound, SubscriptionForbidden, SubscriptionNotFound
from .generator import generate_schedule
from .models import Plan, PlanWorkout, Subscription

if TYPE_CHECKING:
    from apps.accounts.models import User

logger = logging.getLogger(__name__)


# ============================================================================
# Хранилище шаблонов планов
# ============================================================================

def find_plan_by_id(plan_id: int) -> Plan:
    try:
        return Plan.objects.get(pk=plan_id)
    except Plan.DoesNotExist:
        raise PlanNotFound(f'План {plan_id} не найден')


def find_slots_by_plan_id(plan_id: int) -> list[PlanWorkout]:
    """Слоты плана в порядке (week_offset, week_day, order)."""
    return list(PlanWorkout.objects.filter(plan_id=plan_id).order_by('week_offset', 'week_day', 'order', 'id'))


def visible_plans(user: User | None) -> QuerySet[Plan]:
    """
    Планы, доступные пользователю.

    Анонимный — только публичные. Авторизованный — публичные, свои и те,
    на которые он подписан.
    """
    if user is None or not user.is_authenticated:
        return Plan.objects.filter(is_public=True)
    return Plan.objects.filter(
        Q(is_public=True) | Q(created_by=user) | Q(subscriptions__user=user)
    ).distinct()


def has_access(plan: Plan, user: User | None) -> bool:
    if plan.is_public:
        return True
    if user is None or not user.is_authenticated:
        return False
    if plan.created_by_id == user.id:
        return True
    return plan.subscriptions.filter(user=user).exists()


def replace_plan_slots(plan: Plan, slots: Iterable[dict]) -> list[PlanWorkout]:
    """
    Полностью заменяет набор слотов плана.

    Существующие записи журнала не удаляются: их ссылка на слот
    обнуляется (SET_NULL), снимок остаётся.

    Args:
        plan: План
        slots: dict с ключами workout, week_day, week_offset, order, data_override
    """
    with transaction.atomic():
        plan.plan_workouts.all().delete()
        created = PlanWorkout.objects.bulk_create([
            PlanWorkout(
                plan=plan,
                workout=slot['workout'],
                week_day=slot['week_day'],
                week_offset=slot.get('week_offset', 0),
                order=slot.get('order', 0),
                data_override=slot.get('data_override'),
            )
            for slot in slots
        ])
    logger.info('Plan %s slots replaced: %d', plan.id, len(created))
    return created


def create_plan(data: dict, slots: Iterable[dict]) -> Plan:
    """Создаёт план вместе со слотами в одной транзакции."""
    with transaction.atomic():
        plan = Plan.objects.create(**data)
        replace_plan_slots(plan, slots)
    return plan


def update_plan(plan: Plan, data: dict, slots: Iterable[dict] | None = None) -> Plan:
    """Обновляет поля плана. Если slots передан, набор слотов заменяется целиком."""
    with transaction.atomic():
        for field, value in data.items():
            setattr(plan, field, value)
        plan.save()
        if slots is not None:
            replace_plan_slots(plan, slots)
    return plan


def reorder_plan_slots(plan: Plan, slot_ids: list[int]) -> None:
    """
    Проставляет order = 1..n в порядке переданных id.

    Raises:
        ValueError: id не принадлежит плану
    """
    with transaction.atomic():
        slots = {slot.id: slot for slot in plan.plan_workouts.select_for_update()}
        unknown = [slot_id for slot_id in slot_ids if slot_id not in slots]
        if unknown:
            raise ValueError(f'Слоты {unknown} не принадлежат плану {plan.id}')

        for position, slot_id in enumerate(slot_ids, start=1):
            slots[slot_id].order = position
        PlanWorkout.objects.bulk_update([slots[slot_id] for slot_id in slot_ids], ['order'])


# ============================================================================
# Жизненный цикл подписки
# ============================================================================

def _generate_and_insert(subscription: Subscription) -> int:
    """Генерирует черновики по текущим слотам плана и вставляет их в журнал."""
    slots = find_slots_by_plan_id(subscription.plan_id)
    workouts = Workout.objects.in_bulk({slot.workout_id for slot in slots})
    drafts = generate_schedule(subscription, slots, workouts.get)
    return ScheduledWorkout.objects.bulk_insert(drafts)


def _get_owned_subscription(subscription_id: int, user: User) -> Subscription:
    """
    Загружает подписку с блокировкой строки. Вызывать внутри transaction.atomic().

    Raises:
        SubscriptionNotFound: подписки нет
        SubscriptionForbidden: подписка чужая
    """
    try:
        subscription = Subscription.objects.select_for_update().get(pk=subscription_id)
    except Subscription.DoesNotExist:
        raise SubscriptionNotFound(f'Подписка {subscription_id} не найдена')

    if subscription.user_id != user.id:
        raise SubscriptionForbidden()
    return subscription


def subscribe(user: User, plan_id: int, start_date: date) -> Subscription:
    """
    Подписывает пользователя на план и генерирует расписание.

    Returns:
        Созданная подписка в статусе active

    Raises:
        PlanNotFound: плана нет
        AlreadySubscribed: у пользователя уже есть активная подписка на план
    """
    with transaction.atomic():
        plan = find_plan_by_id(plan_id)
        if find_active_subscription(user, plan) is not None:
            raise AlreadySubscribed()

        # Параллельный subscribe упирается в unique_active_plan_subscription
        try:
            with transaction.atomic():
                subscription = Subscription.objects.create(
                    user=user,
                    plan=plan,
                    start_date=start_date,
                    end_date=plan.end_date_for(start_date),
                    status='active',
                )
        except IntegrityError:
            raise AlreadySubscribed()
        inserted = _generate_and_insert(subscription)

    logger.info(
        'Subscription %s created: user=%s plan=%s start=%s, workouts=%d',
        subscription.id, user.id, plan.id, start_date, inserted,
    )
    return subscription


def unsubscribe(subscription_id: int, user: User) -> bool:
    """
    Удаляет подписку вместе со сгенерированными записями журнала.

    Raises:
        SubscriptionNotFound, SubscriptionForbidden
    """
    with transaction.atomic():
        subscription = _get_owned_subscription(subscription_id, user)
        removed = ScheduledWorkout.objects.delete_for_subscription(subscription.id, user.id)
        deleted, _ = Subscription.objects.filter(pk=subscription.id).delete()

    logger.info('Subscription %s deleted: user=%s, workouts removed=%d', subscription_id, user.id, removed)
    return deleted > 0


def regenerate(subscription_id: int, user: User) -> None:
    """
    Пересоздаёт расписание по текущим слотам плана и дате старта.

    Raises:
        SubscriptionNotFound, SubscriptionForbidden
        PlanNotFound: план подписки удалён
    """
    with transaction.atomic():
        subscription = _get_owned_subscription(subscription_id, user)
        if subscription.plan_id is None:
            raise PlanNotFound('План подписки удалён')

        removed = ScheduledWorkout.objects.delete_for_subscription(subscription.id, user.id)
        inserted = _generate_and_insert(subscription)

    logger.info(
        'Subscription %s regenerated: user=%s, removed=%d, workouts=%d',
        subscription_id, user.id, removed, inserted,
    )


def reschedule(subscription_id: int, user: User, new_start_date: date) -> Subscription:
    """
    Переносит подписку на новую дату старта и пересоздаёт расписание.

    Raises:
        SubscriptionNotFound, SubscriptionForbidden
        PlanNotFound: план подписки удалён
    """
    with transaction.atomic():
        subscription = _get_owned_subscription(subscription_id, user)
        if subscription.plan_id is None:
            raise PlanNotFound('План подписки удалён')
        plan = find_plan_by_id(subscription.plan_id)

        subscription.start_date = new_start_date
        subscription.end_date = plan.end_date_for(new_start_date)
        subscription.save(update_fields=['start_date', 'end_date', 'updated_at'])

        removed = ScheduledWorkout.objects.delete_for_subscription(subscription.id, user.id)
        inserted = _generate_and_insert(subscription)

    logger.info(
        'Subscription %s rescheduled to %s: user=%s, removed=%d, workouts=%d',
        subscription_id, new_start_date, user.id, removed, inserted,
    )
    return subscription


def update_status(subscription_id: int, user: User, status: str) -> Subscription:
    """
    Меняет статус подписки. Расписание не трогается.

    Raises:
        ValueError: неизвестный статус
        SubscriptionNotFound, SubscriptionForbidden
        AlreadySubscribed: активация при другой активной подписке на тот же план
    """
    if status not in dict(Subscription.STATUS_CHOICES):
        raise ValueError(f'Неизвестный статус подписки: {status}')

    with transaction.atomic():
        subscription = _get_owned_subscription(subscription_id, user)
        subscription.status = status
        try:
            with transaction.atomic():
                subscription.save(update_fields=['status', 'updated_at'])
        except IntegrityError:
            raise AlreadySubscribed()

    logger.info('Subscription %s status -> %s', subscription_id, status)
    return subscription


def find_active_subscription(user: User, plan: Plan) -> Subscription | None:
    return Subscription.objects.filter(user=user, plan=plan, status='active').first()
