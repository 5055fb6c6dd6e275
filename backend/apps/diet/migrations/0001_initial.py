import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='FoodEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('fdc_id', models.PositiveIntegerField(help_text='FDC ID продукта в USDA')),
                ('food_name', models.CharField(max_length=255)),
                ('data_type', models.CharField(blank=True, default='', max_length=50)),
                ('serving_size', models.FloatField(validators=[django.core.validators.MinValueValidator(0)])),
                ('serving_unit', models.CharField(max_length=100)),
                ('calories', models.FloatField(blank=True, null=True)),
                ('protein_g', models.FloatField(blank=True, null=True)),
                ('carbs_g', models.FloatField(blank=True, null=True)),
                ('fat_g', models.FloatField(blank=True, null=True)),
                ('fiber_g', models.FloatField(blank=True, null=True)),
                ('consumed_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('meal_type', models.CharField(blank=True, choices=[('breakfast', 'Завтрак'), ('lunch', 'Обед'), ('dinner', 'Ужин'), ('snack', 'Перекус')], default='', max_length=10)),
                ('notes', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='food_entries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'food_entries',
                'ordering': ['-consumed_at', '-id'],
                'indexes': [models.Index(fields=['user', 'consumed_at'], name='food_entry_user_consumed_idx')],
            },
        ),
        migrations.CreateModel(
            name='NutritionGoal',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('daily_calories', models.PositiveIntegerField(blank=True, null=True)),
                ('daily_protein_g', models.FloatField(blank=True, null=True)),
                ('daily_carbs_g', models.FloatField(blank=True, null=True)),
                ('daily_fat_g', models.FloatField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='nutrition_goals', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'nutrition_goals',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='UserRecentFood',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('fdc_id', models.PositiveIntegerField()),
                ('food_name', models.CharField(max_length=255)),
                ('times_used', models.PositiveIntegerField(default=1)),
                ('last_used_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='recent_foods', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'user_recent_foods',
                'ordering': ['-last_used_at'],
                'constraints': [models.UniqueConstraint(fields=('user', 'fdc_id'), name='unique_user_recent_food')],
            },
        ),
    ]
