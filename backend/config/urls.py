from django.contrib import admin
from django.urls import path, include
from django.conf import settings

from core.views import health_check

urlpatterns = [
    path('admin/', admin.site.urls),
    path('health/', health_check, name='health'),
    path('api/auth/', include('apps.accounts.urls')),
    # workouts/, scheduled-workouts/, dashboard/
    path('api/', include('apps.workouts.urls')),
    # plans/, plans/subscriptions/
    path('api/', include('apps.plans.urls')),
    path('api/diet/', include('apps.diet.urls')),
]

if settings.DEBUG:
    try:
        import debug_toolbar
        urlpatterns += [path('__debug__/', include(debug_toolbar.urls))]
    except ImportError:
        pass
