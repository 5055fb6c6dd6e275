"""
Тесты генератора расписания (без базы данных).
"""
from dataclasses import dataclass
from datetime import date
from types import SimpleNamespace
from typing import Optional

import pytest

from apps.plans.generator import ScheduledWorkoutDraft, generate_schedule, slot_date, sunday_weekday


@dataclass
class Slot:
    id: int
    workout_id: int
    week_day: int
    week_offset: int = 0
    order: int = 0
    data_override: Optional[dict] = None


def make_workout(name='Жим', workout_data=None):
    return SimpleNamespace(
        name=name,
        category='strength',
        equipment='barbell',
        description='desc',
        instructions='instr',
        workout_data=workout_data if workout_data is not None else {'type': 'strength', 'sets': 3},
    )


@pytest.fixture
def subscription():
    return SimpleNamespace(id=7, user_id=3, plan_id=11, start_date=date(2024, 1, 1))


class TestSlotDate:
    """Привязка слота к дате."""

    def test_sunday_based_weekday(self):
        """Воскресенье = 0, понедельник = 1, суббота = 6."""
        assert sunday_weekday(date(2023, 12, 31)) == 0
        assert sunday_weekday(date(2024, 1, 1)) == 1
        assert sunday_weekday(date(2024, 1, 6)) == 6

    def test_forward_adjustment(self):
        """Старт в понедельник, слот на среду первой недели."""
        assert slot_date(date(2024, 1, 1), 0, 3) == date(2024, 1, 3)

    def test_backward_adjustment(self):
        """Слот на воскресенье уходит на день раньше старта."""
        assert slot_date(date(2024, 1, 1), 0, 0) == date(2023, 12, 31)

    def test_week_offset(self):
        """Вторая неделя, пятница."""
        assert slot_date(date(2024, 1, 1), 1, 5) == date(2024, 1, 12)

    def test_same_weekday(self):
        """День недели совпадает со стартом — дата не сдвигается."""
        assert slot_date(date(2024, 1, 1), 2, 1) == date(2024, 1, 15)

    def test_midweek_start(self):
        """Старт в четверг: понедельник той же недели раньше старта."""
        assert slot_date(date(2024, 2, 1), 1, 1) == date(2024, 2, 5)


class TestGenerateSchedule:
    """Разворачивание слотов в черновики."""

    def test_builds_snapshot_and_references(self, subscription):
        """Черновик содержит снимок тренировки и ссылки на подписку и слот."""
        workouts = {5: make_workout()}
        drafts = generate_schedule(subscription, [Slot(id=1, workout_id=5, week_day=3)], workouts.get)

        assert drafts == [ScheduledWorkoutDraft(
            user_id=3,
            workout_id=5,
            completed_workout_data={
                'name': 'Жим',
                'category': 'strength',
                'equipment': 'barbell',
                'description': 'desc',
                'instructions': 'instr',
                'workout_data': {'type': 'strength', 'sets': 3},
            },
            performed_at=date(2024, 1, 3),
            plan_id=11,
            subscription_id=7,
            plan_workout_id=1,
        )]

    def test_override_replaces_workout_data(self, subscription):
        """data_override слота заменяет параметры тренировки."""
        workouts = {5: make_workout()}
        override = {'type': 'strength', 'sets': 5, 'reps': 5}
        drafts = generate_schedule(
            subscription,
            [Slot(id=1, workout_id=5, week_day=1, data_override=override)],
            workouts.get,
        )

        assert drafts[0].completed_workout_data['workout_data'] == override

    def test_missing_workout_skipped(self, subscription):
        """Слот с несуществующей тренировкой пропускается."""
        workouts = {5: make_workout()}
        slots = [
            Slot(id=1, workout_id=5, week_day=1),
            Slot(id=2, workout_id=999, week_day=2),
            Slot(id=3, workout_id=5, week_day=4),
        ]
        drafts = generate_schedule(subscription, slots, workouts.get)

        assert [d.plan_workout_id for d in drafts] == [1, 3]

    def test_order_by_week_day_and_order(self, subscription):
        """Порядок черновиков: неделя, день, order."""
        workouts = {5: make_workout()}
        slots = [
            Slot(id=1, workout_id=5, week_offset=1, week_day=0),
            Slot(id=2, workout_id=5, week_offset=0, week_day=4, order=2),
            Slot(id=3, workout_id=5, week_offset=0, week_day=4, order=1),
            Slot(id=4, workout_id=5, week_offset=0, week_day=2),
        ]
        drafts = generate_schedule(subscription, slots, workouts.get)

        assert [d.plan_workout_id for d in drafts] == [4, 3, 2, 1]

    def test_deterministic(self, subscription):
        """Одинаковый вход — одинаковый результат."""
        workouts = {5: make_workout(), 6: make_workout('Бег', {'type': 'cardio'})}
        slots = [
            Slot(id=1, workout_id=5, week_day=1),
            Slot(id=2, workout_id=6, week_offset=2, week_day=6),
        ]

        assert generate_schedule(subscription, slots, workouts.get) == generate_schedule(
            subscription, slots, workouts.get,
        )

    def test_snapshot_is_independent_copy(self, subscription):
        """Изменение тренировки после генерации не меняет снимок."""
        workout = make_workout()
        drafts = generate_schedule(subscription, [Slot(id=1, workout_id=5, week_day=1)], {5: workout}.get)

        workout.workout_data['sets'] = 10
        workout.name = 'Другое'

        assert drafts[0].completed_workout_data['workout_data']['sets'] == 3
        assert drafts[0].completed_workout_data['name'] == 'Жим'

    def test_empty_plan(self, subscription):
        assert generate_schedule(subscription, [], {}.get) == []
