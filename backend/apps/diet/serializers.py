from rest_framework import serializers

from .models import FoodEntry, NutritionGoal, UserRecentFood
from .usda import DATA_TYPES, SORT_FIELDS


class FoodSearchSerializer(serializers.Serializer):
    """Параметры поиска в USDA (query string)."""

    query = serializers.CharField(max_length=200)
    data_type = serializers.ListField(
        child=serializers.ChoiceField(choices=DATA_TYPES),
        required=False,
    )
    page_size = serializers.IntegerField(min_value=1, max_value=200, default=25)
    page_number = serializers.IntegerField(min_value=1, default=1)
    sort_by = serializers.ChoiceField(choices=SORT_FIELDS, required=False)
    sort_order = serializers.ChoiceField(choices=['asc', 'desc'], required=False)


class FoodBatchSerializer(serializers.Serializer):
    fdc_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=False,
        max_length=20,
    )


class UserRecentFoodSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserRecentFood
        fields = ['id', 'fdc_id', 'food_name', 'times_used', 'last_used_at']
        read_only_fields = fields


class FoodEntrySerializer(serializers.ModelSerializer):
    serving_size = serializers.FloatField(min_value=0)

    class Meta:
        model = FoodEntry
        fields = [
            'id', 'fdc_id', 'food_name', 'data_type',
            'serving_size', 'serving_unit',
            'calories', 'protein_g', 'carbs_g', 'fat_g', 'fiber_g',
            'consumed_at', 'meal_type', 'notes',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class NutritionGoalSerializer(serializers.ModelSerializer):
    daily_protein_g = serializers.FloatField(min_value=0, required=False, allow_null=True)
    daily_carbs_g = serializers.FloatField(min_value=0, required=False, allow_null=True)
    daily_fat_g = serializers.FloatField(min_value=0, required=False, allow_null=True)

    class Meta:
        model = NutritionGoal
        fields = [
            'id', 'daily_calories', 'daily_protein_g', 'daily_carbs_g', 'daily_fat_g',
            'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
