"""
Pydantic схемы параметров тренировки (workout_data / data_override).

Параметры хранятся в JSONField, но на входе API валидируются как
размеченное объединение по полю ``type``.
"""
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

NonNegativeInt = Annotated[int, Field(ge=0)]
NonNegativeFloat = Annotated[float, Field(ge=0)]


class StrengthData(BaseModel):
    """Силовая: подходы, повторения, вес, отдых."""

    model_config = {'extra': 'forbid'}

    type: Literal['strength']
    sets: Optional[NonNegativeInt] = None
    reps: Optional[NonNegativeInt] = None
    weight_kg: Optional[NonNegativeFloat] = None
    rest_seconds: Optional[NonNegativeInt] = None


class CardioData(BaseModel):
    """Кардио: длительность, дистанция, целевой пульс, темп."""

    model_config = {'extra': 'forbid'}

    type: Literal['cardio']
    duration_minutes: Optional[NonNegativeFloat] = None
    distance_km: Optional[NonNegativeFloat] = None
    target_heart_rate: Optional[NonNegativeInt] = None
    pace: Optional[str] = None  # '6:00/km'


class FlexibilityData(BaseModel):
    """Растяжка: время удержания и количество повторов."""

    model_config = {'extra': 'forbid'}

    type: Literal['flexibility']
    duration_seconds: Optional[NonNegativeInt] = None
    hold_count: Optional[NonNegativeInt] = None


class CustomData(BaseModel):
    """Произвольные параметры, дополнительные поля сохраняются как есть."""

    model_config = {'extra': 'allow'}

    type: Literal['custom']


WorkoutData = Annotated[
    Union[StrengthData, CardioData, FlexibilityData, CustomData],
    Field(discriminator='type'),
]

_workout_data_adapter = TypeAdapter(WorkoutData)


def validate_workout_data(value: Any) -> dict:
    """
    Проверяет параметры тренировки и возвращает нормализованный dict.

    Пустые (None) поля отбрасываются, чтобы снимок в журнале совпадал
    с тем, что прислал клиент.

    Raises:
        pydantic.ValidationError: неизвестный type или неверные поля
    """
    parsed = _workout_data_adapter.validate_python(value)
    return parsed.model_dump(exclude_none=True)
