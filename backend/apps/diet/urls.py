from django.urls import path
from rest_framework.routers import SimpleRouter

from . import views

router = SimpleRouter()
router.register('entries', views.FoodEntryViewSet, basename='food-entry')
router.register('goals', views.NutritionGoalViewSet, basename='nutrition-goal')

urlpatterns = [
    path('search/', views.FoodSearchView.as_view(), name='diet-search'),
    path('food/<int:fdc_id>/', views.FoodDetailView.as_view(), name='diet-food-detail'),
    path('foods/', views.FoodBatchView.as_view(), name='diet-foods'),
    path('cache/', views.FoodCacheView.as_view(), name='diet-cache'),
    path('recent/', views.RecentFoodsView.as_view(), name='diet-recent'),
    path('recent/stats/', views.RecentFoodStatsView.as_view(), name='diet-recent-stats'),
    path('recent/<int:fdc_id>/', views.RecentFoodDetailView.as_view(), name='diet-recent-detail'),
    path('summary/', views.DailySummaryView.as_view(), name='diet-summary'),
] + router.urls
