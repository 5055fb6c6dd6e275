"""
Доменные исключения и их преобразование в HTTP ответы.

Сервисы поднимают исключения из этого модуля (или их наследников в
приложениях), а DRF exception handler превращает их в ответ
``{"error": "..."}`` с нужным статусом. Всё, что не является доменной
ошибкой, обрабатывает стандартный handler DRF либо Django (500).
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Базовая доменная ошибка с HTTP статусом."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Ошибка обработки запроса'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Объект не найден'


class ForbiddenError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = 'Доступ запрещён'


class ExternalServiceError(ServiceError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = 'Внешний сервис недоступен'


def api_exception_handler(exc, context):
    """Exception handler DRF с поддержкой доменных исключений."""
    if isinstance(exc, ServiceError):
        if exc.status_code >= 500:
            logger.warning('%s in %s: %s', type(exc).__name__, context.get('view').__class__.__name__, exc.message)
        return Response({'error': exc.message}, status=exc.status_code)

    return exception_handler(exc, context)
