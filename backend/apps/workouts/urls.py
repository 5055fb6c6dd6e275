from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import DashboardView, ScheduledWorkoutViewSet, WorkoutViewSet

router = SimpleRouter()
# Каталог
router.register('workouts', WorkoutViewSet, basename='workout')
# Журнал тренировок
router.register('scheduled-workouts', ScheduledWorkoutViewSet, basename='scheduled-workout')

urlpatterns = [
    path('dashboard/', DashboardView.as_view(), name='dashboard'),
    path('', include(router.urls)),
]
