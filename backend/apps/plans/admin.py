from django.contrib import admin

from .models import Plan, PlanWorkout, Subscription


class PlanWorkoutInline(admin.TabularInline):
    model = PlanWorkout
    extra = 0
    fields = ['workout', 'week_offset', 'week_day', 'order', 'data_override']
    raw_id_fields = ['workout']


@admin.register(Plan)
class PlanAdmin(admin.ModelAdmin):
    list_display = ['name', 'duration_weeks', 'is_public', 'created_by', 'created_at']
    list_filter = ['is_public', 'created_at']
    search_fields = ['name', 'description']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [PlanWorkoutInline]
    raw_id_fields = ['created_by']


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ['user', 'plan', 'status', 'start_date', 'end_date', 'created_at']
    list_filter = ['status', 'start_date']
    search_fields = ['user__username', 'plan__name']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['user', 'plan']
