import django_filters

from .models import FoodEntry


class FoodEntryFilter(django_filters.FilterSet):
    """Фильтры дневника: конкретный день или диапазон дат, приём пищи."""

    date = django_filters.DateFilter(field_name='consumed_at', lookup_expr='date')
    start_date = django_filters.DateFilter(field_name='consumed_at', lookup_expr='date__gte')
    end_date = django_filters.DateFilter(field_name='consumed_at', lookup_expr='date__lte')

    class Meta:
        model = FoodEntry
        fields = ['meal_type', 'fdc_id']
