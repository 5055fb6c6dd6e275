"""
Тесты API дневника питания (USDA замокан на уровне httpx).
"""
from datetime import timedelta
from unittest.mock import patch

import httpx
import pytest

from apps.diet.models import FoodEntry, NutritionGoal, UserRecentFood
from apps.diet import services


def usda_response(status_code=200, payload=None):
    return httpx.Response(status_code, json=payload if payload is not None else {})


# ============================================================================
# Продукты USDA
# ============================================================================

@pytest.mark.django_db
class TestFoodSearch:
    """GET /api/diet/search/"""

    def test_query_required(self, api_client):
        response = api_client.get('/api/diet/search/')

        assert response.status_code == 400
        assert 'error' in response.data

    def test_search(self, api_client, search_payload):
        with patch('apps.diet.usda.httpx.get', return_value=usda_response(200, search_payload)) as mock_get:
            response = api_client.get('/api/diet/search/', {
                'query': 'apple',
                'data_type': ['Foundation', 'SR Legacy'],
                'page_size': 5,
            })

        assert response.status_code == 200
        assert response.data['totalHits'] == 1
        params = mock_get.call_args.kwargs['params']
        assert params['query'] == 'apple'
        assert params['dataType'] == ['Foundation', 'SR Legacy']
        assert params['pageSize'] == 5
        assert params['api_key'] == 'test-usda-key'

    def test_invalid_page_size(self, api_client):
        response = api_client.get('/api/diet/search/', {'query': 'apple', 'page_size': 500})

        assert response.status_code == 400

    def test_provider_failure_is_502(self, api_client):
        with patch('apps.diet.usda.httpx.get', side_effect=httpx.ConnectTimeout('timeout')):
            response = api_client.get('/api/diet/search/', {'query': 'apple'})

        assert response.status_code == 502
        assert 'error' in response.data


@pytest.mark.django_db
class TestFoodDetail:
    """GET /api/diet/food/<fdc_id>/"""

    def test_detail_with_nutrients_and_serving(self, api_client, apple_detail):
        with patch('apps.diet.usda.httpx.get', return_value=usda_response(200, apple_detail)):
            response = api_client.get('/api/diet/food/171688/')

        assert response.status_code == 200
        assert response.data['description'] == 'Apples, fuji, with skin, raw'
        assert response.data['extracted_nutrients']['calories'] == 63.0
        assert response.data['serving_info'] == {'size': 1.0, 'unit': 'cup'}

    def test_detail_is_cached(self, api_client, apple_detail):
        with patch('apps.diet.usda.httpx.get', return_value=usda_response(200, apple_detail)) as mock_get:
            api_client.get('/api/diet/food/171688/')
            api_client.get('/api/diet/food/171688/')

        assert mock_get.call_count == 1

    def test_unknown_food(self, api_client):
        with patch('apps.diet.usda.httpx.get', return_value=usda_response(404)):
            response = api_client.get('/api/diet/food/1/')

        assert response.status_code == 404
        assert 'error' in response.data


@pytest.mark.django_db
class TestFoodBatch:
    """POST /api/diet/foods/"""

    def test_batch(self, api_client, apple_detail, banana_detail):
        with patch('apps.diet.usda.httpx.post', return_value=usda_response(200, [apple_detail, banana_detail])):
            response = api_client.post('/api/diet/foods/', {'fdc_ids': [171688, 173944]}, format='json')

        assert response.status_code == 200
        assert [f['fdcId'] for f in response.data] == [171688, 173944]
        assert response.data[1]['extracted_nutrients'] == {'calories': 89.0}

    def test_empty_ids(self, api_client):
        response = api_client.post('/api/diet/foods/', {'fdc_ids': []}, format='json')

        assert response.status_code == 400


@pytest.mark.django_db
class TestFoodCacheApi:
    """/api/diet/cache/"""

    def test_stats(self, staff_client, settings):
        response = staff_client.get('/api/diet/cache/')

        assert response.status_code == 200
        assert response.data['alias'] == 'usda'
        assert response.data['timeout'] == settings.USDA_CACHE_TTL
        assert response.data['max_entries'] == settings.USDA_CACHE_MAX_ENTRIES

    def test_clear_forces_refetch(self, staff_client, api_client, apple_detail):
        with patch('apps.diet.usda.httpx.get', return_value=usda_response(200, apple_detail)) as mock_get:
            api_client.get('/api/diet/food/171688/')
            response = staff_client.delete('/api/diet/cache/')
            api_client.get('/api/diet/food/171688/')

        assert response.status_code == 204
        assert mock_get.call_count == 2

    def test_regular_user_forbidden(self, authenticated_client):
        assert authenticated_client.get('/api/diet/cache/').status_code == 403
        assert authenticated_client.delete('/api/diet/cache/').status_code == 403


# ============================================================================
# Дневник
# ============================================================================

@pytest.mark.django_db
class TestFoodEntries:
    """/api/diet/entries/"""

    def test_requires_auth(self, api_client):
        response = api_client.get('/api/diet/entries/')

        assert response.status_code == 401

    def test_create_tracks_recent_food(self, authenticated_client, user):
        payload = {
            'fdc_id': 171688,
            'food_name': 'Apple',
            'serving_size': 150,
            'serving_unit': 'g',
            'calories': 95,
            'meal_type': 'breakfast',
        }

        response = authenticated_client.post('/api/diet/entries/', payload, format='json')
        authenticated_client.post('/api/diet/entries/', payload, format='json')

        assert response.status_code == 201
        assert response.data['food_name'] == 'Apple'
        assert FoodEntry.objects.filter(user=user).count() == 2
        assert UserRecentFood.objects.get(user=user, fdc_id=171688).times_used == 2

    @pytest.mark.parametrize('missing', ['fdc_id', 'food_name', 'serving_size', 'serving_unit'])
    def test_required_fields(self, authenticated_client, missing):
        payload = {'fdc_id': 1, 'food_name': 'Apple', 'serving_size': 1, 'serving_unit': 'g'}
        payload.pop(missing)

        response = authenticated_client.post('/api/diet/entries/', payload, format='json')

        assert response.status_code == 400
        assert missing in response.data

    def test_filter_by_date_and_meal(self, authenticated_client, user, breakfast_entry, jan_first):
        FoodEntry.objects.create(
            user=user, fdc_id=2, food_name='Rice', serving_size=200, serving_unit='g',
            consumed_at=jan_first + timedelta(hours=4), meal_type='lunch',
        )
        FoodEntry.objects.create(
            user=user, fdc_id=3, food_name='Bread', serving_size=50, serving_unit='g',
            consumed_at=jan_first + timedelta(days=3), meal_type='breakfast',
        )

        by_date = authenticated_client.get('/api/diet/entries/?date=2024-01-01')
        by_meal = authenticated_client.get('/api/diet/entries/?meal_type=breakfast')
        by_range = authenticated_client.get('/api/diet/entries/?start_date=2024-01-02&end_date=2024-01-10')

        assert {e['food_name'] for e in by_date.data['results']} == {'Apple', 'Rice'}
        assert {e['food_name'] for e in by_meal.data['results']} == {'Apple', 'Bread'}
        assert [e['food_name'] for e in by_range.data['results']] == ['Bread']

    def test_foreign_entry_not_found(self, another_authenticated_client, breakfast_entry):
        response = another_authenticated_client.get(f'/api/diet/entries/{breakfast_entry.id}/')

        assert response.status_code == 404

    def test_update_and_delete(self, authenticated_client, breakfast_entry):
        response = authenticated_client.patch(
            f'/api/diet/entries/{breakfast_entry.id}/', {'serving_size': 200}, format='json',
        )
        assert response.status_code == 200
        assert response.data['serving_size'] == 200

        response = authenticated_client.delete(f'/api/diet/entries/{breakfast_entry.id}/')
        assert response.status_code == 204
        assert not FoodEntry.objects.filter(pk=breakfast_entry.id).exists()


@pytest.mark.django_db
class TestDailySummaryApi:
    """GET /api/diet/summary/"""

    def test_summary_with_goal(self, authenticated_client, breakfast_entry, active_goal):
        response = authenticated_client.get('/api/diet/summary/?date=2024-01-01')

        assert response.status_code == 200
        assert response.data['date'] == '2024-01-01'
        assert response.data['summary']['total_calories'] == pytest.approx(95)
        assert response.data['summary']['breakfast_count'] == 1
        assert response.data['goal']['id'] == active_goal.id
        assert response.data['progress']['calories'] == pytest.approx(4.8, abs=0.05)
        assert response.data['progress']['fat_g'] is None

    def test_summary_without_goal(self, authenticated_client):
        response = authenticated_client.get('/api/diet/summary/')

        assert response.status_code == 200
        assert response.data['goal'] is None
        assert response.data['progress'] is None
        assert response.data['summary']['entry_count'] == 0

    def test_invalid_date(self, authenticated_client):
        response = authenticated_client.get('/api/diet/summary/?date=not-a-date')

        assert response.status_code == 400


# ============================================================================
# История продуктов
# ============================================================================

@pytest.mark.django_db
class TestRecentFoodsApi:
    """/api/diet/recent/"""

    def test_recent_and_frequent(self, authenticated_client, user):
        services.track_user_food(user, 1, 'Apple')
        services.track_user_food(user, 1, 'Apple')
        services.track_user_food(user, 2, 'Banana')

        recent = authenticated_client.get('/api/diet/recent/')
        frequent = authenticated_client.get('/api/diet/recent/?sort_by=frequent&limit=1')

        assert [f['fdc_id'] for f in recent.data] == [2, 1]
        assert [f['fdc_id'] for f in frequent.data] == [1]

    def test_invalid_sort(self, authenticated_client):
        response = authenticated_client.get('/api/diet/recent/?sort_by=alphabet')

        assert response.status_code == 400

    def test_remove_one(self, authenticated_client, user):
        services.track_user_food(user, 1, 'Apple')

        response = authenticated_client.delete('/api/diet/recent/1/')
        missing = authenticated_client.delete('/api/diet/recent/1/')

        assert response.status_code == 204
        assert missing.status_code == 404

    def test_clear(self, authenticated_client, user):
        services.track_user_food(user, 1, 'Apple')
        services.track_user_food(user, 2, 'Banana')

        response = authenticated_client.delete('/api/diet/recent/')

        assert response.status_code == 204
        assert not UserRecentFood.objects.filter(user=user).exists()

    def test_stats(self, authenticated_client, user):
        services.track_user_food(user, 1, 'Apple')

        response = authenticated_client.get('/api/diet/recent/stats/')

        assert response.data['total_unique_foods'] == 1
        assert response.data['most_logged_food'] == 'Apple'


# ============================================================================
# Цели
# ============================================================================

@pytest.mark.django_db
class TestGoalsApi:
    """/api/diet/goals/"""

    def test_create_replaces_active(self, authenticated_client, user, active_goal):
        response = authenticated_client.post('/api/diet/goals/', {'daily_calories': 1800}, format='json')

        assert response.status_code == 201
        assert response.data['is_active'] is True
        active_goal.refresh_from_db()
        assert active_goal.is_active is False

    def test_active(self, authenticated_client, active_goal):
        response = authenticated_client.get('/api/diet/goals/active/')

        assert response.status_code == 200
        assert response.data['id'] == active_goal.id

    def test_active_missing(self, authenticated_client):
        response = authenticated_client.get('/api/diet/goals/active/')

        assert response.status_code == 404
        assert 'error' in response.data

    def test_activate(self, authenticated_client, user, active_goal):
        other = NutritionGoal.objects.create(user=user, daily_calories=2500, is_active=False)

        response = authenticated_client.post(f'/api/diet/goals/{other.id}/activate/')

        assert response.status_code == 200
        assert response.data['is_active'] is True
        active_goal.refresh_from_db()
        assert active_goal.is_active is False

    def test_update_to_active_deactivates_others(self, authenticated_client, user, active_goal):
        other = NutritionGoal.objects.create(user=user, daily_calories=2500, is_active=False)

        response = authenticated_client.patch(f'/api/diet/goals/{other.id}/', {'is_active': True}, format='json')

        assert response.status_code == 200
        active_goal.refresh_from_db()
        assert active_goal.is_active is False

    def test_foreign_goal(self, another_authenticated_client, active_goal):
        response = another_authenticated_client.post(f'/api/diet/goals/{active_goal.id}/activate/')

        assert response.status_code == 404

    def test_list_own_only(self, authenticated_client, another_user, active_goal):
        NutritionGoal.objects.create(user=another_user, daily_calories=1000)

        response = authenticated_client.get('/api/diet/goals/')

        assert [g['id'] for g in response.data] == [active_goal.id]
