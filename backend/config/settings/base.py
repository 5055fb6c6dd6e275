from pathlib import Path
from decouple import config, Csv
from datetime import timedelta
import dj_database_url

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY: SECRET_KEY должен быть установлен в env, дефолт только для локальной разработки
SECRET_KEY = config('DJANGO_SECRET_KEY', default='dev-only-insecure-key-DO-NOT-USE-IN-PRODUCTION')
DEBUG = config('DJANGO_DEBUG', default=False, cast=bool)
ALLOWED_HOSTS = config('DJANGO_ALLOWED_HOSTS', default='localhost,127.0.0.1', cast=Csv())

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    # Third-party
    'rest_framework',
    'rest_framework_simplejwt.token_blacklist',  # для BLACKLIST_AFTER_ROTATION и logout
    'corsheaders',
    'django_filters',
    # Local apps
    'apps.accounts',
    'apps.workouts',
    'apps.plans',
    'apps.diet',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'

# Database
# SECURITY: DATABASE_URL должен быть установлен в env для production
DATABASES = {
    'default': dj_database_url.config(
        default=config('DATABASE_URL', default='sqlite:///db.sqlite3')
    )
}

# Auth
AUTH_USER_MODEL = 'accounts.User'

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

# Минимальная длина пароля при регистрации через API
MIN_PASSWORD_LENGTH = 8

# Internationalization
LANGUAGE_CODE = 'ru'
TIME_ZONE = config('DJANGO_TIME_ZONE', default='Europe/Moscow')
USE_I18N = True
USE_TZ = True

# Static files
STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# DRF
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework_simplejwt.authentication.JWTAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticated',
    ],
    'DEFAULT_PAGINATION_CLASS': 'core.pagination.StandardPagination',
    'PAGE_SIZE': 20,
    'DEFAULT_FILTER_BACKENDS': [
        'django_filters.rest_framework.DjangoFilterBackend',
        'rest_framework.filters.SearchFilter',
        'rest_framework.filters.OrderingFilter',
    ],
    # Доменные исключения (NotFound/Forbidden/ошибки USDA) -> HTTP ответы
    'EXCEPTION_HANDLER': 'core.exceptions.api_exception_handler',
    # Используем SafeThrottle с locmem кешем — не зависит от Redis
    'DEFAULT_THROTTLE_CLASSES': [
        'core.throttling.SafeAnonRateThrottle',
        'core.throttling.SafeUserRateThrottle',
    ],
    'DEFAULT_THROTTLE_RATES': {
        'anon': '100/hour',
        'user': '1000/hour',
        # Отдельный лимит для поиска в USDA (внешний API с квотой на ключ)
        'usda_search': '60/minute',
    },
}

# JWT
SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(minutes=30),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=7),
    'ROTATE_REFRESH_TOKENS': True,
    'BLACKLIST_AFTER_ROTATION': True,  # отозванные refresh токены добавляются в blacklist
}

# CORS
CORS_ALLOWED_ORIGINS = config(
    'CORS_ALLOWED_ORIGINS',
    default='http://localhost:3000,http://localhost:5173',
    cast=Csv()
)
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_HEADERS = [
    'accept',
    'accept-encoding',
    'authorization',
    'content-type',
    'dnt',
    'origin',
    'user-agent',
    'x-csrftoken',
    'x-requested-with',
]
CORS_ALLOW_METHODS = [
    'DELETE',
    'GET',
    'OPTIONS',
    'PATCH',
    'POST',
    'PUT',
]

# Redis
REDIS_URL = config('REDIS_URL', default='redis://localhost:6379/0')

# USDA FoodData Central
USDA_API_KEY = config('USDA_API_KEY', default='')
USDA_API_BASE_URL = config('USDA_API_BASE_URL', default='https://api.nal.usda.gov/fdc/v1')
USDA_TIMEOUT = config('USDA_TIMEOUT', default=10, cast=int)  # секунды
USDA_CACHE_TTL = config('USDA_CACHE_TTL', default=7 * 24 * 60 * 60, cast=int)  # 7 дней
USDA_CACHE_MAX_ENTRIES = config('USDA_CACHE_MAX_ENTRIES', default=100, cast=int)

# Cache
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.redis.RedisCache',
        'LOCATION': REDIS_URL,
    },
    # Локальный кеш для throttling — не зависит от Redis
    'throttle': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'throttle-cache',
    },
    # Кеш карточек продуктов USDA (ограниченный размер, LRU-вытеснение locmem)
    'usda': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'usda-food-cache',
        'TIMEOUT': USDA_CACHE_TTL,
        'OPTIONS': {
            'MAX_ENTRIES': USDA_CACHE_MAX_ENTRIES,
        },
    },
}

# SECURITY: Ограничение размера request body для защиты от DoS
DATA_UPLOAD_MAX_MEMORY_SIZE = config('DATA_UPLOAD_MAX_MEMORY_SIZE', default=5 * 1024 * 1024, cast=int)  # 5 MB
