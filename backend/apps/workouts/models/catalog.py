from django.conf import settings
from django.db import models


class Workout(models.Model):
    """Тренировка из каталога (шаблон упражнения с параметрами)."""
    CATEGORY_CHOICES = [
        ('strength', 'Силовая'),
        ('cardio', 'Кардио'),
        ('flexibility', 'Растяжка'),
        ('custom', 'Другое'),
    ]

    name = models.CharField(max_length=255)
    category = models.CharField(max_length=50, blank=True, default='')
    equipment = models.CharField(max_length=100, blank=True, default='')
    description = models.TextField(blank=True, default='')
    instructions = models.TextField(blank=True, default='')
    # Параметры тренировки, см. apps.workouts.schemas.WorkoutData
    workout_data = models.JSONField(
        default=dict,
        blank=True,
        help_text='{"type": "strength", "sets": 3, "reps": 10, ...}'
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='created_workouts'
    )
    is_public = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'workouts'
        ordering = ['name']

    def __str__(self):
        return self.name
