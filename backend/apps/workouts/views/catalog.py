from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from core.permissions import IsOwnerOrReadOnly

from apps.workouts.models import ScheduledWorkout
from apps.workouts.serializers import ScheduledWorkoutSerializer, WorkoutSerializer
from apps.workouts.services import visible_workouts

WORKOUT_HISTORY_LIMIT = 10


class WorkoutViewSet(viewsets.ModelViewSet):
    """Каталог тренировок: публичные + свои. Изменять можно только свои."""
    serializer_class = WorkoutSerializer
    permission_classes = [IsAuthenticatedOrReadOnly, IsOwnerOrReadOnly]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['category', 'equipment']
    search_fields = ['name', 'description']
    ordering_fields = ['name', 'category', 'created_at']
    ordering = ['name']

    def get_queryset(self):
        return visible_workouts(self.request.user)

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)

    @action(detail=True, methods=['get'], permission_classes=[IsAuthenticated])
    def history(self, request, pk=None):
        """Последние выполнения этой тренировки текущим пользователем."""
        workout = self.get_object()
        records = ScheduledWorkout.objects.filter(
            user=request.user, workout=workout,
        ).order_by('-performed_at', '-id')[:WORKOUT_HISTORY_LIMIT]
        return Response(ScheduledWorkoutSerializer(records, many=True).data)
