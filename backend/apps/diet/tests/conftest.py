from datetime import datetime, timezone as dt_timezone

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.diet.models import FoodEntry, NutritionGoal


# ============================================================================
# Ответы USDA
# ============================================================================

@pytest.fixture
def apple_detail():
    """Карточка продукта (вложенный формат нутриентов: nutrient.id / amount)."""
    return {
        'fdcId': 171688,
        'description': 'Apples, fuji, with skin, raw',
        'dataType': 'SR Legacy',
        'foodNutrients': [
            {'nutrient': {'id': 1008, 'name': 'Energy', 'unitName': 'kcal'}, 'amount': 63.0},
            {'nutrient': {'id': 1003, 'name': 'Protein', 'unitName': 'g'}, 'amount': 0.15},
            {'nutrient': {'id': 1005, 'name': 'Carbohydrate, by difference', 'unitName': 'g'}, 'amount': 15.2},
            {'nutrient': {'id': 1004, 'name': 'Total lipid (fat)', 'unitName': 'g'}, 'amount': 0.18},
            {'nutrient': {'id': 1079, 'name': 'Fiber, total dietary', 'unitName': 'g'}, 'amount': 2.1},
            {'nutrient': {'id': 1087, 'name': 'Calcium, Ca', 'unitName': 'mg'}, 'amount': 7.0},
        ],
        'foodPortions': [
            {'amount': 1.0, 'gramWeight': 192.0, 'measureUnit': {'name': 'cup'}},
        ],
    }


@pytest.fixture
def banana_detail():
    return {
        'fdcId': 173944,
        'description': 'Bananas, raw',
        'dataType': 'SR Legacy',
        'foodNutrients': [
            {'nutrient': {'id': 1008}, 'amount': 89.0},
        ],
    }


@pytest.fixture
def search_payload():
    """Ответ /foods/search (плоский формат нутриентов: nutrientId / value)."""
    return {
        'totalHits': 1,
        'currentPage': 1,
        'totalPages': 1,
        'foods': [
            {
                'fdcId': 171688,
                'description': 'Apples, fuji, with skin, raw',
                'dataType': 'SR Legacy',
                'foodNutrients': [
                    {'nutrientId': 1008, 'nutrientName': 'Energy', 'value': 63.0},
                ],
            },
        ],
    }


# ============================================================================
# Дневник
# ============================================================================

@pytest.fixture
def jan_first():
    return datetime(2024, 1, 1, 9, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def breakfast_entry(user, jan_first):
    return FoodEntry.objects.create(
        user=user,
        fdc_id=171688,
        food_name='Apple',
        serving_size=150,
        serving_unit='g',
        calories=95,
        protein_g=0.5,
        carbs_g=25,
        fat_g=0.3,
        fiber_g=4.4,
        consumed_at=jan_first,
        meal_type='breakfast',
    )


@pytest.fixture
def active_goal(user):
    return NutritionGoal.objects.create(
        user=user,
        daily_calories=2000,
        daily_protein_g=150,
        daily_carbs_g=200,
        daily_fat_g=None,
    )


@pytest.fixture
def staff_client(db, django_user_model):
    """API клиент администратора."""
    admin = django_user_model.objects.create_user(
        username='admin', email='admin@test.com', password='testpass123', is_staff=True,
    )
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {RefreshToken.for_user(admin).access_token}')
    return client
