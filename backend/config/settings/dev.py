from pathlib import Path

from .base import *  # noqa: F401, F403

DEBUG = True

# SQLite for local development
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': Path(__file__).resolve().parent.parent.parent / 'db.sqlite3',
    }
}

INSTALLED_APPS += [  # noqa: F405
    'django_extensions',
    'debug_toolbar',
]

MIDDLEWARE.insert(0, 'debug_toolbar.middleware.DebugToolbarMiddleware')  # noqa: F405

INTERNAL_IPS = ['127.0.0.1', '172.0.0.0/8']

# Allow all CORS origins in development
CORS_ALLOW_ALL_ORIGINS = True

# Use in-memory cache for local development (no Redis required)
CACHES['default'] = {  # noqa: F405
    'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {'class': 'logging.StreamHandler'},
    },
    'loggers': {
        'apps': {'handlers': ['console'], 'level': 'DEBUG'},
    },
}
