from datetime import timedelta

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q


class Plan(models.Model):
    """Многонедельный план тренировок (шаблон для подписки)."""

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    duration_weeks = models.PositiveIntegerField(
        default=4,
        validators=[MinValueValidator(1)],
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='created_plans'
    )
    is_public = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'plans'
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def end_date_for(self, start_date):
        """Дата окончания подписки, начатой в start_date."""
        return start_date + timedelta(days=self.duration_weeks * 7)


class PlanWorkout(models.Model):
    """Слот плана: тренировка в конкретный день конкретной недели."""

    plan = models.ForeignKey(
        Plan,
        on_delete=models.CASCADE,
        related_name='plan_workouts'
    )
    workout = models.ForeignKey(
        'workouts.Workout',
        on_delete=models.CASCADE,
        related_name='plan_slots'
    )
    # Дни недели: 0=Вс, 1=Пн, ..., 6=Сб
    week_day = models.PositiveSmallIntegerField(
        validators=[MaxValueValidator(6)],
        help_text='0=Вс, 1=Пн, ..., 6=Сб'
    )
    week_offset = models.PositiveIntegerField(
        default=0,
        help_text='Номер недели от начала плана (с 0)'
    )
    order = models.PositiveIntegerField(default=0)
    # Параметры, заменяющие workout_data тренировки в этом слоте
    data_override = models.JSONField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'plan_workouts'
        ordering = ['week_offset', 'week_day', 'order', 'id']
        constraints = [
            models.CheckConstraint(condition=Q(week_day__lte=6), name='plan_workout_week_day_range'),
        ]

    def __str__(self):
        return f"{self.plan} - нед. {self.week_offset}, день {self.week_day}"


class Subscription(models.Model):
    """Подписка пользователя на план с конкретной датой старта."""
    STATUS_CHOICES = [
        ('active', 'Активна'),
        ('paused', 'Приостановлена'),
        ('completed', 'Завершена'),
        ('cancelled', 'Отменена'),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='plan_subscriptions'
    )
    # SET_NULL: удаление плана не удаляет подписку и журнал пользователя
    plan = models.ForeignKey(
        Plan,
        on_delete=models.SET_NULL,
        null=True,
        related_name='subscriptions'
    )
    start_date = models.DateField()
    end_date = models.DateField()
    status = models.CharField(
        max_length=15,
        choices=STATUS_CHOICES,
        default='active'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'plan_subscriptions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'plan', 'status'], name='plan_sub_user_plan_status_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'plan'],
                condition=Q(status='active'),
                name='unique_active_plan_subscription',
            ),
        ]

    def __str__(self):
        return f"{self.user} - {self.plan} ({self.status})"
