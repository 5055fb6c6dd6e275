"""
Сервисы дневника питания.

FoodService читает карточки USDA через кеш (read-through), поиск
не кешируется. Остальное: история продуктов пользователя, дневная
сводка КБЖУ и цели.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from django.db import transaction
from django.db.models import Count, F, FloatField, Q, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from .cache import FoodCache
from .models import FoodEntry, NutritionGoal, UserRecentFood
from .usda import UsdaClient

if TYPE_CHECKING:
    from apps.accounts.models import User

logger = logging.getLogger(__name__)

# ID нутриентов в базе USDA
NUTRIENT_IDS = {
    1008: 'calories',   # Energy (kcal)
    1003: 'protein_g',  # Protein
    1005: 'carbs_g',    # Carbohydrate, by difference
    1004: 'fat_g',      # Total lipid (fat)
    1079: 'fiber_g',    # Fiber, total dietary
}

MEAL_TYPES = [choice for choice, _ in FoodEntry.MEAL_TYPE_CHOICES]
NUTRIENT_FIELDS = ['calories', 'protein_g', 'carbs_g', 'fat_g', 'fiber_g']

# поле цели -> поле сводки
GOAL_PROGRESS_FIELDS = {
    'daily_calories': 'total_calories',
    'daily_protein_g': 'total_protein_g',
    'daily_carbs_g': 'total_carbs_g',
    'daily_fat_g': 'total_fat_g',
}


# ============================================================================
# Продукты USDA
# ============================================================================

class FoodService:
    """Доступ к карточкам продуктов: сначала кеш, затем USDA."""

    def __init__(self, client: UsdaClient, cache: FoodCache):
        self.client = client
        self.cache = cache

    def search_foods(self, query: str, **params) -> dict:
        return self.client.search_foods(query, **params)

    def get_food(self, fdc_id: int) -> dict:
        food = self.cache.get(fdc_id)
        if food is not None:
            logger.debug('USDA cache hit: %s', fdc_id)
            return food

        logger.debug('USDA cache miss: %s', fdc_id)
        food = self.client.get_food(fdc_id)
        self.cache.set(fdc_id, food)
        return food

    def get_foods(self, fdc_ids: list[int]) -> list[dict]:
        """
        Несколько карточек. В USDA запрашиваются только отсутствующие в кеше.

        Returns:
            Карточки в порядке fdc_ids (неизвестные USDA id пропускаются)
        """
        found = self.cache.get_many(fdc_ids)
        missing = [fdc_id for fdc_id in dict.fromkeys(fdc_ids) if fdc_id not in found]

        if missing:
            fetched = {food['fdcId']: food for food in self.client.get_foods(missing) if 'fdcId' in food}
            self.cache.set_many(fetched)
            found.update(fetched)

        logger.debug('USDA batch: requested=%d, fetched=%d', len(fdc_ids), len(missing))
        return [found[fdc_id] for fdc_id in dict.fromkeys(fdc_ids) if fdc_id in found]


def get_food_service() -> FoodService:
    return FoodService(UsdaClient.from_settings(), FoodCache())


def extract_nutrients(food_nutrients: list[dict] | None) -> dict:
    """
    Достаёт калории и БЖУ из списка foodNutrients.

    Поддерживает оба формата USDA: плоский (поиск: nutrientId/value)
    и вложенный (карточка: nutrient.id/amount).
    """
    nutrients = {}
    for item in food_nutrients or []:
        nutrient_id = item.get('nutrientId')
        value = item.get('value')
        if nutrient_id is None and isinstance(item.get('nutrient'), dict):
            nutrient_id = item['nutrient'].get('id')
            value = item.get('amount')

        field = NUTRIENT_IDS.get(nutrient_id)
        if field and value is not None:
            nutrients[field] = value
    return nutrients


def get_serving_info(food: dict) -> dict:
    """Размер порции: servingSize -> бытовая мера -> первая порция -> 100 г."""
    if food.get('servingSize') and food.get('servingSizeUnit'):
        return {'size': food['servingSize'], 'unit': food['servingSizeUnit']}

    if food.get('householdServingFullText'):
        return {'size': 1, 'unit': food['householdServingFullText']}

    portions = food.get('foodPortions') or []
    if portions:
        portion = portions[0]
        unit = (portion.get('measureUnit') or {}).get('name') or 'serving'
        return {'size': portion.get('amount'), 'unit': unit}

    return {'size': 100, 'unit': 'g'}


# ============================================================================
# История продуктов пользователя
# ============================================================================

def track_user_food(user: User, fdc_id: int, food_name: str) -> UserRecentFood:
    """Отмечает использование продукта: создаёт запись или увеличивает times_used."""
    recent, created = UserRecentFood.objects.get_or_create(
        user=user,
        fdc_id=fdc_id,
        defaults={'food_name': food_name},
    )
    if not created:
        UserRecentFood.objects.filter(pk=recent.pk).update(
            times_used=F('times_used') + 1,
            food_name=food_name,
            last_used_at=timezone.now(),
        )
        recent.refresh_from_db()
    return recent


def get_recent_foods(user: User, limit: int = 20) -> list[UserRecentFood]:
    return list(UserRecentFood.objects.filter(user=user).order_by('-last_used_at', '-id')[:limit])


def get_frequent_foods(user: User, limit: int = 20) -> list[UserRecentFood]:
    return list(
        UserRecentFood.objects.filter(user=user).order_by('-times_used', '-last_used_at', '-id')[:limit]
    )


def remove_recent_food(user: User, fdc_id: int) -> bool:
    deleted, _ = UserRecentFood.objects.filter(user=user, fdc_id=fdc_id).delete()
    return deleted > 0


def clear_recent_foods(user: User) -> int:
    deleted, _ = UserRecentFood.objects.filter(user=user).delete()
    logger.info('Recent foods cleared: user=%s, removed=%d', user.id, deleted)
    return deleted


def get_recent_food_stats(user: User) -> dict:
    foods = UserRecentFood.objects.filter(user=user)
    stats = foods.aggregate(
        total_unique_foods=Count('id'),
        total_logs=Coalesce(Sum('times_used'), 0),
    )
    top = foods.order_by('-times_used', '-last_used_at').first()
    stats['most_logged_food'] = top.food_name if top else None
    return stats


# ============================================================================
# Записи дневника и сводка
# ============================================================================

def log_food_entry(user: User, data: dict) -> FoodEntry:
    """Создаёт запись дневника и обновляет историю продуктов в одной транзакции."""
    with transaction.atomic():
        entry = FoodEntry.objects.create(user=user, **data)
        track_user_food(user, entry.fdc_id, entry.food_name)

    logger.info('Food entry %s logged: user=%s fdc_id=%s', entry.id, user.id, entry.fdc_id)
    return entry


def get_daily_summary(user: User, day: date) -> dict:
    """
    Суммы КБЖУ и количество записей за день (по локальной дате consumed_at).

    Returns:
        dict: total_calories, total_protein_g, ..., entry_count,
        breakfast_count, lunch_count, dinner_count, snack_count
    """
    totals = {
        f'total_{field}': Coalesce(Sum(field), Value(0.0), output_field=FloatField())
        for field in NUTRIENT_FIELDS
    }
    meal_counts = {
        f'{meal}_count': Count('id', filter=Q(meal_type=meal))
        for meal in MEAL_TYPES
    }
    return FoodEntry.objects.filter(user=user, consumed_at__date=day).aggregate(
        **totals,
        entry_count=Count('id'),
        **meal_counts,
    )


def calculate_progress(summary: dict, goal: NutritionGoal | None) -> dict | None:
    """Процент выполнения цели по каждому показателю (None, если показатель не задан)."""
    if goal is None:
        return None

    progress = {}
    for goal_field, summary_field in GOAL_PROGRESS_FIELDS.items():
        target = getattr(goal, goal_field)
        key = goal_field.removeprefix('daily_')
        progress[key] = round(summary[summary_field] / target * 100, 1) if target else None
    return progress


# ============================================================================
# Цели питания
# ============================================================================

def get_active_goal(user: User) -> NutritionGoal | None:
    return NutritionGoal.objects.filter(user=user, is_active=True).order_by('-created_at', '-id').first()


def _deactivate_other_goals(user: User, exclude_id: int | None = None) -> int:
    goals = NutritionGoal.objects.filter(user=user, is_active=True)
    if exclude_id is not None:
        goals = goals.exclude(pk=exclude_id)
    return goals.update(is_active=False)


def create_goal(user: User, data: dict) -> NutritionGoal:
    """Создаёт цель. Активная цель снимает активность с остальных целей пользователя."""
    with transaction.atomic():
        if data.get('is_active', True):
            _deactivate_other_goals(user)
        goal = NutritionGoal.objects.create(user=user, **data)
    return goal


def update_goal(goal: NutritionGoal, data: dict) -> NutritionGoal:
    with transaction.atomic():
        for field, value in data.items():
            setattr(goal, field, value)
        if goal.is_active:
            _deactivate_other_goals(goal.user, exclude_id=goal.id)
        goal.save()
    return goal


def activate_goal(goal: NutritionGoal) -> NutritionGoal:
    with transaction.atomic():
        _deactivate_other_goals(goal.user, exclude_id=goal.id)
        goal.is_active = True
        goal.save(update_fields=['is_active', 'updated_at'])

    logger.info('Nutrition goal %s activated: user=%s', goal.id, goal.user_id)
    return goal
