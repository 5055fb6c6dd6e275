import django_filters

from .models import ScheduledWorkout


class ScheduledWorkoutFilter(django_filters.FilterSet):
    start_date = django_filters.DateFilter(field_name='performed_at', lookup_expr='gte')
    end_date = django_filters.DateFilter(field_name='performed_at', lookup_expr='lte')

    class Meta:
        model = ScheduledWorkout
        fields = ['subscription', 'plan', 'workout', 'completion_state', 'start_date', 'end_date']
