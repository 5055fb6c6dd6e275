from django.contrib import admin

from .models import FoodEntry, NutritionGoal, UserRecentFood


@admin.register(FoodEntry)
class FoodEntryAdmin(admin.ModelAdmin):
    list_display = ['user', 'food_name', 'meal_type', 'calories', 'consumed_at']
    list_filter = ['meal_type', 'consumed_at']
    search_fields = ['food_name', 'user__email']
    raw_id_fields = ['user']


@admin.register(NutritionGoal)
class NutritionGoalAdmin(admin.ModelAdmin):
    list_display = ['user', 'daily_calories', 'daily_protein_g', 'daily_carbs_g', 'daily_fat_g', 'is_active']
    list_filter = ['is_active']
    raw_id_fields = ['user']


@admin.register(UserRecentFood)
class UserRecentFoodAdmin(admin.ModelAdmin):
    list_display = ['user', 'food_name', 'fdc_id', 'times_used', 'last_used_at']
    search_fields = ['food_name', 'user__email']
    raw_id_fields = ['user']
