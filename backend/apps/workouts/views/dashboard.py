from rest_framework import serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.workouts.serializers import ScheduledWorkoutSerializer
from apps.workouts.services import get_dashboard


class DashboardQuerySerializer(serializers.Serializer):
    days = serializers.IntegerField(min_value=1, max_value=365, default=30)


class DashboardView(APIView):
    """GET /api/dashboard/?days=30 — статистика тренировок за период."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = DashboardQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        dashboard = get_dashboard(request.user, query.validated_data['days'])
        dashboard['recent_workouts'] = ScheduledWorkoutSerializer(
            dashboard['recent_workouts'], many=True,
        ).data
        return Response(dashboard)
