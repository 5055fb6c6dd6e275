from rest_framework import serializers

from apps.workouts.models import Workout

from .fields import WorkoutDataField


class WorkoutSerializer(serializers.ModelSerializer):
    workout_data = WorkoutDataField(required=False)

    class Meta:
        model = Workout
        fields = [
            'id', 'name', 'category', 'equipment', 'description', 'instructions',
            'workout_data', 'is_public', 'created_by', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_by', 'created_at', 'updated_at']
