"""
Throttle классы, использующие locmem кеш вместо Redis.

DRF throttle обращается к кешу при каждом запросе, поэтому счётчики
живут в отдельном локальном кеше 'throttle'.
"""
from django.core.cache import caches
from rest_framework.throttling import AnonRateThrottle, UserRateThrottle


class SafeAnonRateThrottle(AnonRateThrottle):
    cache = caches['throttle']


class SafeUserRateThrottle(UserRateThrottle):
    cache = caches['throttle']


class UsdaSearchRateThrottle(UserRateThrottle):
    """Лимит на поиск продуктов: запросы уходят во внешний USDA API.

    Для анонимных запросов ключом служит IP (поведение UserRateThrottle).
    """

    cache = caches['throttle']
    scope = 'usda_search'
