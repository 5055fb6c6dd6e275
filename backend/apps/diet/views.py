import logging

from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.throttling import UsdaSearchRateThrottle

from .cache import FoodCache
from .exceptions import GoalNotFound
from .filters import FoodEntryFilter
from .models import FoodEntry, NutritionGoal
from .serializers import (
    FoodBatchSerializer,
    FoodEntrySerializer,
    FoodSearchSerializer,
    NutritionGoalSerializer,
    UserRecentFoodSerializer,
)
from .services import (
    activate_goal,
    calculate_progress,
    clear_recent_foods,
    create_goal,
    extract_nutrients,
    get_active_goal,
    get_daily_summary,
    get_food_service,
    get_frequent_foods,
    get_recent_food_stats,
    get_recent_foods,
    get_serving_info,
    log_food_entry,
    remove_recent_food,
    update_goal,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Продукты USDA
# ============================================================================

class FoodSearchView(APIView):
    """GET /api/diet/search/?query=apple — поиск продуктов в USDA (без кеша)."""
    permission_classes = [AllowAny]
    throttle_classes = [UsdaSearchRateThrottle]

    def get(self, request):
        if not request.query_params.get('query', '').strip():
            return Response({'error': 'Параметр query обязателен'}, status=status.HTTP_400_BAD_REQUEST)

        params = FoodSearchSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        data = params.validated_data

        result = get_food_service().search_foods(
            data['query'],
            data_types=data.get('data_type'),
            page_size=data['page_size'],
            page_number=data['page_number'],
            sort_by=data.get('sort_by'),
            sort_order=data.get('sort_order'),
        )
        return Response(result)


class FoodDetailView(APIView):
    """GET /api/diet/food/<fdc_id>/ — карточка продукта + КБЖУ и порция."""
    permission_classes = [AllowAny]

    def get(self, request, fdc_id):
        food = get_food_service().get_food(fdc_id)
        return Response({
            **food,
            'extracted_nutrients': extract_nutrients(food.get('foodNutrients')),
            'serving_info': get_serving_info(food),
        })


class FoodBatchView(APIView):
    """POST /api/diet/foods/ {"fdc_ids": [...]} — несколько карточек за запрос."""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = FoodBatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        foods = get_food_service().get_foods(serializer.validated_data['fdc_ids'])
        return Response([
            {
                **food,
                'extracted_nutrients': extract_nutrients(food.get('foodNutrients')),
                'serving_info': get_serving_info(food),
            }
            for food in foods
        ])


class FoodCacheView(APIView):
    """
    GET /api/diet/cache/ — параметры кеша карточек USDA
    DELETE /api/diet/cache/ — сбросить кеш
    """
    permission_classes = [IsAdminUser]

    def get(self, request):
        return Response(FoodCache().stats())

    def delete(self, request):
        FoodCache().clear()
        logger.info('USDA food cache cleared by user=%s', request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ============================================================================
# История продуктов пользователя
# ============================================================================

class RecentFoodsQuerySerializer(serializers.Serializer):
    sort_by = serializers.ChoiceField(choices=['recent', 'frequent'], default='recent')
    limit = serializers.IntegerField(min_value=1, max_value=100, default=20)


class RecentFoodsView(APIView):
    """
    GET /api/diet/recent/?sort_by=recent|frequent&limit=20
    DELETE /api/diet/recent/ — очистить историю
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = RecentFoodsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = query.validated_data

        if data['sort_by'] == 'frequent':
            foods = get_frequent_foods(request.user, data['limit'])
        else:
            foods = get_recent_foods(request.user, data['limit'])
        return Response(UserRecentFoodSerializer(foods, many=True).data)

    def delete(self, request):
        clear_recent_foods(request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RecentFoodDetailView(APIView):
    """DELETE /api/diet/recent/<fdc_id>/ — убрать продукт из истории."""
    permission_classes = [IsAuthenticated]

    def delete(self, request, fdc_id):
        if not remove_recent_food(request.user, fdc_id):
            return Response({'error': 'Продукт не найден в истории'}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RecentFoodStatsView(APIView):
    """GET /api/diet/recent/stats/ — сколько продуктов и записей в истории."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(get_recent_food_stats(request.user))


# ============================================================================
# Дневник
# ============================================================================

class FoodEntryViewSet(viewsets.ModelViewSet):
    """Записи дневника питания. Создание записи обновляет историю продуктов."""
    serializer_class = FoodEntrySerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = FoodEntryFilter

    def get_queryset(self):
        return FoodEntry.objects.filter(user=self.request.user).order_by('-consumed_at', '-id')

    def perform_create(self, serializer):
        serializer.instance = log_food_entry(self.request.user, serializer.validated_data)


class DailySummaryQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)


class DailySummaryView(APIView):
    """GET /api/diet/summary/?date=YYYY-MM-DD — КБЖУ за день и прогресс по активной цели."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = DailySummaryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        day = query.validated_data.get('date') or timezone.localdate()

        summary = get_daily_summary(request.user, day)
        goal = get_active_goal(request.user)
        return Response({
            'date': day.isoformat(),
            'summary': summary,
            'goal': NutritionGoalSerializer(goal).data if goal else None,
            'progress': calculate_progress(summary, goal),
        })


# ============================================================================
# Цели питания
# ============================================================================

class NutritionGoalViewSet(viewsets.ModelViewSet):
    """Цели КБЖУ. Активной может быть только одна."""
    serializer_class = NutritionGoalSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        return NutritionGoal.objects.filter(user=self.request.user).order_by('-created_at', '-id')

    def perform_create(self, serializer):
        serializer.instance = create_goal(self.request.user, serializer.validated_data)

    def perform_update(self, serializer):
        serializer.instance = update_goal(serializer.instance, serializer.validated_data)

    @action(detail=False, methods=['get'])
    def active(self, request):
        goal = get_active_goal(request.user)
        if goal is None:
            raise GoalNotFound()
        return Response(self.get_serializer(goal).data)

    @action(detail=True, methods=['post'])
    def activate(self, request, pk=None):
        goal = activate_goal(self.get_object())
        return Response(self.get_serializer(goal).data)
