from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import PlanViewSet, SubscriptionViewSet

router = SimpleRouter()
# Подписки регистрируются до планов: plans/subscriptions/ не должен совпасть с plans/<pk>/
router.register('plans/subscriptions', SubscriptionViewSet, basename='subscription')
router.register('plans', PlanViewSet, basename='plan')

urlpatterns = [
    path('', include(router.urls)),
]
