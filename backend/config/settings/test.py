"""Настройки для pytest: SQLite в памяти, locmem кеши, быстрый хешер паролей."""
from .base import *  # noqa: F401, F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

TIME_ZONE = 'UTC'

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    },
    'throttle': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'throttle-cache-test',
    },
    'usda': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'usda-food-cache-test',
        'TIMEOUT': USDA_CACHE_TTL,  # noqa: F405
        'OPTIONS': {
            'MAX_ENTRIES': USDA_CACHE_MAX_ENTRIES,  # noqa: F405
        },
    },
}

USDA_API_KEY = 'test-usda-key'

# Throttling отключён: locmem счётчики живут весь прогон тестов
REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # noqa: F405
    'DEFAULT_THROTTLE_CLASSES': [],
    'DEFAULT_THROTTLE_RATES': {
        **REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'],  # noqa: F405
        'usda_search': '10000/minute',
    },
}
