import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('workouts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Plan',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, default='')),
                ('duration_weeks', models.PositiveIntegerField(default=4, validators=[django.core.validators.MinValueValidator(1)])),
                ('is_public', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_plans', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'plans',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='PlanWorkout',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('week_day', models.PositiveSmallIntegerField(help_text='0=Вс, 1=Пн, ..., 6=Сб', validators=[django.core.validators.MaxValueValidator(6)])),
                ('week_offset', models.PositiveIntegerField(default=0, help_text='Номер недели от начала плана (с 0)')),
                ('order', models.PositiveIntegerField(default=0)),
                ('data_override', models.JSONField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('plan', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='plan_workouts', to='plans.plan')),
                ('workout', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='plan_slots', to='workouts.workout')),
            ],
            options={
                'db_table': 'plan_workouts',
                'ordering': ['week_offset', 'week_day', 'order', 'id'],
                'constraints': [models.CheckConstraint(condition=models.Q(('week_day__lte', 6)), name='plan_workout_week_day_range')],
            },
        ),
        migrations.CreateModel(
            name='Subscription',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('start_date', models.DateField()),
                ('end_date', models.DateField()),
                ('status', models.CharField(choices=[('active', 'Активна'), ('paused', 'Приостановлена'), ('completed', 'Завершена'), ('cancelled', 'Отменена')], default='active', max_length=15)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('plan', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='subscriptions', to='plans.plan')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='plan_subscriptions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'plan_subscriptions',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['user', 'plan', 'status'], name='plan_sub_user_plan_status_idx')],
            },
        ),
    ]
