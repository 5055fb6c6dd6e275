import json
from pathlib import Path

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.workouts.models import Workout
from apps.workouts.schemas import validate_workout_data

FIXTURE_PATH = Path(__file__).resolve().parent.parent.parent / 'fixtures' / 'workouts.json'


class Command(BaseCommand):
    help = 'Load public workout catalog from fixtures/workouts.json'

    def add_arguments(self, parser):
        parser.add_argument(
            '--force',
            action='store_true',
            help='Delete existing public system workouts before loading',
        )

    def handle(self, *args, **options):
        with open(FIXTURE_PATH, 'r', encoding='utf-8') as f:
            data = json.load(f)

        self.stdout.write(f'Found {len(data)} workouts in {FIXTURE_PATH.name}')

        created = 0
        with transaction.atomic():
            if options.get('force'):
                deleted, _ = Workout.objects.filter(created_by__isnull=True).delete()
                self.stdout.write(f'Deleted {deleted} existing system workouts')

            for item in data:
                _, was_created = Workout.objects.get_or_create(
                    name=item['name'],
                    created_by=None,
                    defaults={
                        'category': item.get('category', ''),
                        'equipment': item.get('equipment', ''),
                        'description': item.get('description', ''),
                        'instructions': item.get('instructions', ''),
                        'workout_data': validate_workout_data(item['workout_data']),
                        'is_public': True,
                    },
                )
                created += was_created

        self.stdout.write(self.style.SUCCESS(f'Created {created} workouts'))
