from pydantic import ValidationError as PydanticValidationError
from rest_framework import serializers

from apps.workouts.schemas import validate_workout_data


class WorkoutDataField(serializers.JSONField):
    """JSON поле с проверкой параметров тренировки через pydantic."""

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        try:
            return validate_workout_data(value)
        except PydanticValidationError as exc:
            raise serializers.ValidationError([
                f"{'.'.join(str(part) for part in err['loc']) or 'type'}: {err['msg']}"
                for err in exc.errors()
            ])
