from django.contrib import admin

from .models import ScheduledWorkout, Workout


@admin.register(Workout)
class WorkoutAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'equipment', 'is_public', 'created_by', 'created_at']
    list_filter = ['category', 'is_public']
    search_fields = ['name', 'description']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['created_by']


@admin.register(ScheduledWorkout)
class ScheduledWorkoutAdmin(admin.ModelAdmin):
    list_display = ['user', 'workout', 'performed_at', 'completion_state', 'subscription']
    list_filter = ['completion_state', 'performed_at']
    search_fields = ['user__username', 'notes']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['user', 'workout', 'plan', 'subscription', 'plan_workout']
