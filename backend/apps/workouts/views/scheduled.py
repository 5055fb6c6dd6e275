from rest_framework import status, viewsets
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from apps.workouts.filters import ScheduledWorkoutFilter
from apps.workouts.models import ScheduledWorkout
from apps.workouts.serializers import ScheduledWorkoutCreateSerializer, ScheduledWorkoutSerializer
from apps.workouts.services import create_scheduled_workout


class ScheduledWorkoutViewSet(viewsets.ModelViewSet):
    """Журнал тренировок пользователя. Чужие записи не видны (404)."""
    serializer_class = ScheduledWorkoutSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = ScheduledWorkoutFilter
    ordering_fields = ['performed_at', 'created_at']
    ordering = ['-performed_at', '-id']

    def get_queryset(self):
        return ScheduledWorkout.objects.filter(user=self.request.user)

    def create(self, request, *args, **kwargs):
        serializer = ScheduledWorkoutCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        record = create_scheduled_workout(
            request.user,
            data['workout'],
            completed_workout_data=data.get('completed_workout_data'),
            performed_at=data.get('performed_at'),
            notes=data['notes'],
            completion_state=data['completion_state'],
        )
        return Response(ScheduledWorkoutSerializer(record).data, status=status.HTTP_201_CREATED)
