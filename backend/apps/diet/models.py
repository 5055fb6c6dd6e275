from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class FoodEntry(models.Model):
    """Запись дневника питания (продукт из USDA FoodData Central)."""
    MEAL_TYPE_CHOICES = [
        ('breakfast', 'Завтрак'),
        ('lunch', 'Обед'),
        ('dinner', 'Ужин'),
        ('snack', 'Перекус'),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='food_entries'
    )
    fdc_id = models.PositiveIntegerField(help_text='FDC ID продукта в USDA')
    food_name = models.CharField(max_length=255)
    data_type = models.CharField(max_length=50, blank=True, default='')  # Foundation, Branded, ...
    serving_size = models.FloatField(validators=[MinValueValidator(0)])
    serving_unit = models.CharField(max_length=100)

    # КБЖУ на порцию
    calories = models.FloatField(null=True, blank=True)
    protein_g = models.FloatField(null=True, blank=True)
    carbs_g = models.FloatField(null=True, blank=True)
    fat_g = models.FloatField(null=True, blank=True)
    fiber_g = models.FloatField(null=True, blank=True)

    consumed_at = models.DateTimeField(default=timezone.now)
    meal_type = models.CharField(max_length=10, choices=MEAL_TYPE_CHOICES, blank=True, default='')
    notes = models.TextField(blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'food_entries'
        ordering = ['-consumed_at', '-id']
        indexes = [
            models.Index(fields=['user', 'consumed_at'], name='food_entry_user_consumed_idx'),
        ]

    def __str__(self):
        return f"{self.user} - {self.food_name} ({self.consumed_at:%Y-%m-%d})"


class NutritionGoal(models.Model):
    """Дневная норма КБЖУ. Активной может быть только одна цель пользователя."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='nutrition_goals'
    )
    daily_calories = models.PositiveIntegerField(null=True, blank=True)
    daily_protein_g = models.FloatField(null=True, blank=True)
    daily_carbs_g = models.FloatField(null=True, blank=True)
    daily_fat_g = models.FloatField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'nutrition_goals'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user} - {self.daily_calories} ккал{' (активна)' if self.is_active else ''}"


class UserRecentFood(models.Model):
    """Продукты, которые пользователь добавлял в дневник (для быстрого выбора)."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='recent_foods'
    )
    fdc_id = models.PositiveIntegerField()
    food_name = models.CharField(max_length=255)
    times_used = models.PositiveIntegerField(default=1)
    last_used_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'user_recent_foods'
        ordering = ['-last_used_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'fdc_id'], name='unique_user_recent_food'),
        ]

    def __str__(self):
        return f"{self.user} - {self.food_name} x{self.times_used}"
