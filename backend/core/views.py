import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.utils import timezone

logger = logging.getLogger(__name__)


def health_check(request):
    """GET /health/ — проверка доступности приложения и базы данных."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError as e:
        logger.error('Health check failed: %s', e)
        return JsonResponse({
            'status': 'ERROR',
            'timestamp': timezone.now().isoformat(),
            'database': 'disconnected',
        }, status=503)

    return JsonResponse({
        'status': 'OK',
        'timestamp': timezone.now().isoformat(),
        'database': 'connected',
    })
