"""
Тесты схем параметров тренировки.
"""
import pytest
from pydantic import ValidationError

from apps.workouts.schemas import validate_workout_data


class TestValidateWorkoutData:
    """Размеченное объединение по полю type."""

    def test_strength(self):
        data = validate_workout_data({'type': 'strength', 'sets': 3, 'reps': 10, 'weight_kg': 60})
        assert data == {'type': 'strength', 'sets': 3, 'reps': 10, 'weight_kg': 60.0}

    def test_cardio_drops_empty_fields(self):
        """None поля не попадают в результат."""
        data = validate_workout_data({'type': 'cardio', 'duration_minutes': 30, 'pace': None})
        assert data == {'type': 'cardio', 'duration_minutes': 30.0}

    def test_flexibility(self):
        data = validate_workout_data({'type': 'flexibility', 'duration_seconds': 30, 'hold_count': 3})
        assert data['hold_count'] == 3

    def test_custom_keeps_extra_fields(self):
        data = validate_workout_data({'type': 'custom', 'rounds': 5, 'exercises': ['burpee', 'jump']})
        assert data == {'type': 'custom', 'rounds': 5, 'exercises': ['burpee', 'jump']}

    def test_unknown_type(self):
        with pytest.raises(ValidationError):
            validate_workout_data({'type': 'yoga'})

    def test_missing_type(self):
        with pytest.raises(ValidationError):
            validate_workout_data({'sets': 3})

    def test_negative_value(self):
        with pytest.raises(ValidationError):
            validate_workout_data({'type': 'strength', 'sets': -1})

    def test_unknown_field_for_variant(self):
        """Поле другого варианта не принимается."""
        with pytest.raises(ValidationError):
            validate_workout_data({'type': 'strength', 'distance_km': 5})
