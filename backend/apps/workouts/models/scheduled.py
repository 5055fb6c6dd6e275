from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Iterable

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

if TYPE_CHECKING:
    from apps.plans.generator import ScheduledWorkoutDraft


class ScheduledWorkoutManager(models.Manager):
    """Массовые операции над записями, сгенерированными из подписки на план."""

    def bulk_insert(self, drafts: Iterable[ScheduledWorkoutDraft]) -> int:
        """
        Вставляет черновики одним батчем, дубликаты пропускаются.

        Дубликатом считается запись с тем же (user, subscription,
        plan_workout, performed_at), см. ограничение в Meta.

        Returns:
            Количество переданных черновиков
        """
        records = [self.model(**asdict(draft)) for draft in drafts]
        if records:
            self.bulk_create(records, ignore_conflicts=True)
        return len(records)

    def delete_for_subscription(self, subscription_id: int, user_id: int) -> int:
        """Удаляет все записи подписки пользователя, возвращает количество."""
        deleted, _ = self.filter(subscription_id=subscription_id, user_id=user_id).delete()
        return deleted


class ScheduledWorkout(models.Model):
    """
    Запланированная или выполненная тренировка пользователя.

    completed_workout_data — снимок тренировки на момент создания,
    изменения в каталоге на него не влияют.
    """
    COMPLETION_CHOICES = [
        ('pending', 'Ожидает'),
        ('complete', 'Выполнена'),
        ('incomplete', 'Не выполнена'),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='scheduled_workouts'
    )
    workout = models.ForeignKey(
        'workouts.Workout',
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='scheduled_workouts'
    )
    completed_workout_data = models.JSONField(default=dict)
    performed_at = models.DateField(default=timezone.localdate)
    notes = models.TextField(blank=True, default='')
    completion_state = models.CharField(
        max_length=15,
        choices=COMPLETION_CHOICES,
        default='pending'
    )

    # Заполняются только для записей, сгенерированных из плана
    plan = models.ForeignKey(
        'plans.Plan',
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='scheduled_workouts'
    )
    subscription = models.ForeignKey(
        'plans.Subscription',
        on_delete=models.CASCADE,
        null=True, blank=True,
        related_name='scheduled_workouts'
    )
    plan_workout = models.ForeignKey(
        'plans.PlanWorkout',
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='scheduled_workouts'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ScheduledWorkoutManager()

    class Meta:
        db_table = 'scheduled_workouts'
        ordering = ['-performed_at', '-id']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'subscription', 'plan_workout', 'performed_at'],
                condition=Q(subscription__isnull=False),
                name='unique_generated_scheduled_workout',
            ),
        ]
        indexes = [
            models.Index(fields=['user', 'performed_at'], name='sched_workout_user_date_idx'),
        ]

    def __str__(self):
        return f"{self.user} - {self.completed_workout_data.get('name', '?')} ({self.performed_at})"
