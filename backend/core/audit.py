"""
Audit logging middleware для запросов к персональным данным.

Дневник питания, подписки на планы и журнал тренировок содержат данные
о здоровье пользователя, поэтому каждое обращение к ним пишется в
логгер 'audit' без тела запроса и ответа.
"""
import hashlib
import logging
import time

from django.http import HttpRequest, HttpResponse

logger = logging.getLogger('audit')

AUDITED_URL_PREFIXES = (
    '/api/diet/',
    '/api/scheduled-workouts/',
    '/api/plans/subscriptions/',
    '/api/dashboard/',
)

# Поиск по справочнику USDA не содержит персональных данных
SKIPPED_URL_PREFIXES = (
    '/api/diet/search/',
    '/api/diet/food/',
)

SENSITIVE_METHODS = {'POST', 'PUT', 'PATCH', 'DELETE'}


def _hash_identifier(value: str) -> str:
    """Хеширует идентификатор для безопасного логирования."""
    return hashlib.sha256(value.encode()).hexdigest()[:12]


def _get_client_ip(request: HttpRequest) -> str:
    """Получает IP клиента с учётом прокси."""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR', 'unknown')


def should_audit(path: str) -> bool:
    if path.startswith(SKIPPED_URL_PREFIXES):
        return False
    return path.startswith(AUDITED_URL_PREFIXES)


def describe_user(request: HttpRequest) -> str:
    """Анонимизированный идентификатор пользователя для лога."""
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return 'anonymous'
    return f'user_{_hash_identifier(str(user.pk))}'


class AuditLoggingMiddleware:
    """
    Логирует метод, путь, статус, пользователя (хеш), IP и длительность.

    Изменяющие запросы и ответы с ошибкой пишутся с уровнем WARNING,
    чтение — INFO. Значения query-параметров не логируются, только имена.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if not should_audit(request.path):
            return self.get_response(request)

        started = time.monotonic()
        response = self.get_response(request)
        duration_ms = int((time.monotonic() - started) * 1000)

        self._log_access(request, response, duration_ms)
        return response

    def _log_access(self, request: HttpRequest, response: HttpResponse, duration_ms: int) -> None:
        user_info = describe_user(request)
        client_ip = _get_client_ip(request)

        if request.method in SENSITIVE_METHODS or response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        audit_data = {
            'event': 'personal_data_access',
            'method': request.method,
            'path': request.path,
            'status': response.status_code,
            'user': user_info,
            'ip': client_ip,
            'duration_ms': duration_ms,
        }
        if request.GET:
            audit_data['query_params'] = sorted(request.GET.keys())

        logger.log(
            level,
            'AUDIT: %s %s -> %s [user=%s, ip=%s, %sms]',
            request.method, request.path, response.status_code, user_info, client_ip, duration_ms,
            extra={'audit_data': audit_data},
        )
