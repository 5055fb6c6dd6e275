import pytest
from django.contrib.auth import get_user_model
from django.core.cache import caches
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

User = get_user_model()


# ============================================================================
# Пользователи
# ============================================================================

@pytest.fixture
def user(db):
    """Основной тестовый пользователь."""
    return User.objects.create_user(
        username='athlete',
        email='athlete@test.com',
        password='testpass123',
        first_name='Иван',
    )


@pytest.fixture
def another_user(db):
    """Другой пользователь (для проверок доступа)."""
    return User.objects.create_user(
        username='stranger',
        email='stranger@test.com',
        password='testpass123',
    )


# ============================================================================
# API клиенты
# ============================================================================

def _client_for(user) -> APIClient:
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {str(refresh.access_token)}')
    client._user = user
    return client


@pytest.fixture
def api_client():
    """Неаутентифицированный API клиент."""
    return APIClient()


@pytest.fixture
def authenticated_client(user):
    """Аутентифицированный API клиент."""
    return _client_for(user)


@pytest.fixture
def another_authenticated_client(another_user):
    """Аутентифицированный API клиент другого пользователя."""
    return _client_for(another_user)


@pytest.fixture(autouse=True)
def clear_caches():
    """Локальные кеши не должны протекать между тестами."""
    yield
    for alias in ('default', 'usda'):
        caches[alias].clear()
