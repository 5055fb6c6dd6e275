from rest_framework import serializers

from apps.workouts.models import ScheduledWorkout


class ScheduledWorkoutSerializer(serializers.ModelSerializer):
    """Запись журнала (чтение и изменение)."""

    class Meta:
        model = ScheduledWorkout
        fields = [
            'id', 'workout', 'completed_workout_data', 'performed_at', 'notes',
            'completion_state', 'plan', 'subscription', 'plan_workout',
            'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'workout', 'plan', 'subscription', 'plan_workout',
            'created_at', 'updated_at',
        ]


class ScheduledWorkoutCreateSerializer(serializers.Serializer):
    """Создание записи вручную: снимок строится из тренировки, если не передан."""

    workout = serializers.IntegerField(min_value=1)
    completed_workout_data = serializers.JSONField(required=False)
    performed_at = serializers.DateField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    completion_state = serializers.ChoiceField(
        choices=ScheduledWorkout.COMPLETION_CHOICES,
        default='pending',
    )

    def validate_completed_workout_data(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError('Ожидается объект')
        return value
