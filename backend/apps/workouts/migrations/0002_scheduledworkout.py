import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('workouts', '0001_initial'),
        ('plans', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ScheduledWorkout',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('completed_workout_data', models.JSONField(default=dict)),
                ('performed_at', models.DateField(default=django.utils.timezone.localdate)),
                ('notes', models.TextField(blank=True, default='')),
                ('completion_state', models.CharField(choices=[('pending', 'Ожидает'), ('complete', 'Выполнена'), ('incomplete', 'Не выполнена')], default='pending', max_length=15)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('plan', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='scheduled_workouts', to='plans.plan')),
                ('plan_workout', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='scheduled_workouts', to='plans.planworkout')),
                ('subscription', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='scheduled_workouts', to='plans.subscription')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='scheduled_workouts', to=settings.AUTH_USER_MODEL)),
                ('workout', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='scheduled_workouts', to='workouts.workout')),
            ],
            options={
                'db_table': 'scheduled_workouts',
                'ordering': ['-performed_at', '-id'],
                'indexes': [models.Index(fields=['user', 'performed_at'], name='sched_workout_user_date_idx')],
                'constraints': [models.UniqueConstraint(condition=models.Q(('subscription__isnull', False)), fields=('user', 'subscription', 'plan_workout', 'performed_at'), name='unique_generated_scheduled_workout')],
            },
        ),
    ]
