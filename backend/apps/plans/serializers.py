from django.utils import timezone
from rest_framework import serializers

from apps.workouts.serializers import WorkoutDataField
from apps.workouts.services import visible_workouts

from .models import Plan, PlanWorkout, Subscription
from .services import create_plan, update_plan


class VisibleWorkoutField(serializers.PrimaryKeyRelatedField):
    """Тренировка из каталога, доступного текущему пользователю."""

    def get_queryset(self):
        request = self.context.get('request')
        return visible_workouts(request.user if request else None)


class PlanWorkoutSerializer(serializers.ModelSerializer):
    """Слот плана с названием и категорией тренировки."""

    workout = VisibleWorkoutField()
    workout_name = serializers.CharField(source='workout.name', read_only=True)
    workout_category = serializers.CharField(source='workout.category', read_only=True)
    week_day = serializers.IntegerField(min_value=0, max_value=6)
    week_offset = serializers.IntegerField(min_value=0, default=0)
    order = serializers.IntegerField(min_value=0, default=0)
    data_override = WorkoutDataField(required=False, allow_null=True, default=None)

    class Meta:
        model = PlanWorkout
        fields = [
            'id', 'workout', 'workout_name', 'workout_category',
            'week_day', 'week_offset', 'order', 'data_override',
        ]
        read_only_fields = ['id']


class PlanListSerializer(serializers.ModelSerializer):
    workouts_count = serializers.SerializerMethodField()

    class Meta:
        model = Plan
        fields = [
            'id', 'name', 'description', 'duration_weeks', 'is_public',
            'created_by', 'workouts_count', 'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_workouts_count(self, obj) -> int:
        if hasattr(obj, '_workouts_count'):
            return obj._workouts_count
        return obj.plan_workouts.count()


class PlanDetailSerializer(serializers.ModelSerializer):
    """План со слотами. При записи ключ workouts заменяет весь набор слотов."""

    workouts = PlanWorkoutSerializer(source='plan_workouts', many=True, required=False)
    duration_weeks = serializers.IntegerField(min_value=1, default=4)

    class Meta:
        model = Plan
        fields = [
            'id', 'name', 'description', 'duration_weeks', 'is_public',
            'created_by', 'workouts', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_by', 'created_at', 'updated_at']

    def create(self, validated_data):
        slots = validated_data.pop('plan_workouts', [])
        return create_plan(validated_data, slots)

    def update(self, instance, validated_data):
        slots = validated_data.pop('plan_workouts', None)
        return update_plan(instance, validated_data, slots)


class PlanReorderSerializer(serializers.Serializer):
    slot_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)


class SubscribeSerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)

    def validate(self, attrs):
        attrs.setdefault('start_date', timezone.localdate())
        return attrs


class SubscriptionSerializer(serializers.ModelSerializer):
    plan_name = serializers.CharField(source='plan.name', read_only=True, default=None)

    class Meta:
        model = Subscription
        fields = [
            'id', 'plan', 'plan_name', 'start_date', 'end_date', 'status',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class SubscriptionStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Subscription.STATUS_CHOICES)


class RescheduleSerializer(serializers.Serializer):
    start_date = serializers.DateField()
