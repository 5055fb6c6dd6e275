from django.db.models import Count
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.workouts.models import ScheduledWorkout
from apps.workouts.serializers import ScheduledWorkoutSerializer

from . import services
from .exceptions import SubscriptionNotFound
from .models import Plan, Subscription
from .permissions import PlanPermission
from .serializers import (
    PlanDetailSerializer,
    PlanListSerializer,
    PlanReorderSerializer,
    RescheduleSerializer,
    SubscribeSerializer,
    SubscriptionSerializer,
    SubscriptionStatusSerializer,
)


def _is_true(value) -> bool:
    return str(value).lower() in ('1', 'true', 'yes')


class PlanViewSet(viewsets.ModelViewSet):
    """
    Планы тренировок.

    Список: анонимам — публичные, авторизованным — публичные, свои и те,
    на которые есть подписка. Фильтры ?subscribed=true и ?created_by_me=true.
    """
    permission_classes = [PlanPermission]
    filter_backends = [SearchFilter, OrderingFilter]
    search_fields = ['name', 'description']
    ordering_fields = ['created_at', 'name', 'duration_weeks']
    ordering = ['-created_at']
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        if self.action != 'list':
            return Plan.objects.prefetch_related('plan_workouts__workout')

        user = self.request.user
        qs = services.visible_plans(user)
        params = self.request.query_params
        if user.is_authenticated:
            if _is_true(params.get('subscribed')):
                qs = qs.filter(subscriptions__user=user, subscriptions__status='active')
            elif _is_true(params.get('created_by_me')):
                qs = qs.filter(created_by=user)
        return qs.annotate(_workouts_count=Count('plan_workouts', distinct=True))

    def get_serializer_class(self):
        if self.action == 'list':
            return PlanListSerializer
        return PlanDetailSerializer

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)

    @action(detail=True, methods=['post'])
    def subscribe(self, request, pk=None):
        """Подписка на план с генерацией расписания."""
        plan = self.get_object()
        serializer = SubscribeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        subscription = services.subscribe(request.user, plan.id, serializer.validated_data['start_date'])
        return Response(SubscriptionSerializer(subscription).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def unsubscribe(self, request, pk=None):
        """Отписка от плана: удаляет активную подписку и её расписание."""
        plan = self.get_object()
        subscription = services.find_active_subscription(request.user, plan)
        if subscription is None:
            raise SubscriptionNotFound('Нет активной подписки на план')

        services.unsubscribe(subscription.id, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def reorder(self, request, pk=None):
        """Новый порядок слотов: order = 1..n по списку slot_ids."""
        plan = self.get_object()
        serializer = PlanReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            services.reorder_plan_slots(plan, serializer.validated_data['slot_ids'])
        except ValueError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        plan = self.get_queryset().get(pk=plan.pk)
        return Response(PlanDetailSerializer(plan).data)


class SubscriptionViewSet(mixins.ListModelMixin,
                          mixins.RetrieveModelMixin,
                          viewsets.GenericViewSet):
    """
    Подписки текущего пользователя.

    Изменение статуса, перенос, перегенерация и удаление идут через
    сервисы жизненного цикла: чужая подписка -> 403, несуществующая -> 404.
    """
    serializer_class = SubscriptionSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['status', 'plan']
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        return Subscription.objects.filter(user=self.request.user).select_related('plan')

    def update(self, request, pk=None, partial=False):
        """Изменение статуса подписки."""
        serializer = SubscriptionStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        subscription = services.update_status(int(pk), request.user, serializer.validated_data['status'])
        return Response(SubscriptionSerializer(subscription).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk, partial=True)

    def destroy(self, request, pk=None):
        services.unsubscribe(int(pk), request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post', 'put'])
    def reschedule(self, request, pk=None):
        """Перенос подписки на новую дату старта."""
        serializer = RescheduleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        subscription = services.reschedule(int(pk), request.user, serializer.validated_data['start_date'])
        return Response(SubscriptionSerializer(subscription).data)

    @action(detail=True, methods=['post'])
    def regenerate(self, request, pk=None):
        """Пересоздание расписания по текущим слотам плана."""
        services.regenerate(int(pk), request.user)
        subscription = self.get_queryset().get(pk=pk)
        return Response(SubscriptionSerializer(subscription).data)

    @action(detail=True, methods=['get'])
    def workouts(self, request, pk=None):
        """Записи журнала, сгенерированные подпиской."""
        subscription = self.get_object()
        qs = ScheduledWorkout.objects.filter(
            subscription=subscription, user=request.user,
        ).order_by('performed_at', 'id')

        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(ScheduledWorkoutSerializer(page, many=True).data)
        return Response(ScheduledWorkoutSerializer(qs, many=True).data)
