"""
Тесты audit-логирования обращений к персональным данным.
"""
import logging

import pytest
from django.contrib.auth.models import AnonymousUser
from django.http import HttpResponse
from django.test import RequestFactory

from core.audit import AuditLoggingMiddleware, describe_user, should_audit


@pytest.fixture
def rf():
    return RequestFactory()


def _middleware(status_code=200):
    return AuditLoggingMiddleware(lambda request: HttpResponse(status=status_code))


class TestShouldAudit:

    @pytest.mark.parametrize('path', [
        '/api/diet/entries/',
        '/api/diet/summary/',
        '/api/scheduled-workouts/1/',
        '/api/plans/subscriptions/3/regenerate/',
        '/api/dashboard/',
    ])
    def test_personal_data_paths(self, path):
        assert should_audit(path) is True

    @pytest.mark.parametrize('path', [
        '/api/diet/search/',
        '/api/diet/food/171688/',
        '/api/workouts/',
        '/api/plans/',
        '/api/auth/login/',
    ])
    def test_skipped_paths(self, path):
        assert should_audit(path) is False


class TestAuditMiddleware:

    def test_read_logged_as_info(self, rf, caplog):
        request = rf.get('/api/diet/entries/', {'date': '2024-01-01'})
        request.user = AnonymousUser()

        with caplog.at_level(logging.INFO, logger='audit'):
            response = _middleware()(request)

        assert response.status_code == 200
        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert record.audit_data['user'] == 'anonymous'
        assert record.audit_data['query_params'] == ['date']
        assert '2024-01-01' not in record.getMessage()

    def test_write_logged_as_warning(self, rf, caplog):
        request = rf.post('/api/diet/entries/')
        request.user = AnonymousUser()

        with caplog.at_level(logging.INFO, logger='audit'):
            _middleware(201)(request)

        assert caplog.records[-1].levelno == logging.WARNING

    def test_error_response_logged_as_warning(self, rf, caplog):
        request = rf.get('/api/plans/subscriptions/1/')
        request.user = AnonymousUser()

        with caplog.at_level(logging.INFO, logger='audit'):
            _middleware(404)(request)

        assert caplog.records[-1].levelno == logging.WARNING
        assert caplog.records[-1].audit_data['status'] == 404

    def test_forwarded_ip(self, rf, caplog):
        request = rf.get('/api/dashboard/', HTTP_X_FORWARDED_FOR='10.0.0.1, 172.16.0.1')
        request.user = AnonymousUser()

        with caplog.at_level(logging.INFO, logger='audit'):
            _middleware()(request)

        assert caplog.records[-1].audit_data['ip'] == '10.0.0.1'

    def test_not_audited_path_is_silent(self, rf, caplog):
        request = rf.get('/api/workouts/')

        with caplog.at_level(logging.INFO, logger='audit'):
            _middleware()(request)

        assert not [r for r in caplog.records if r.name == 'audit']


@pytest.mark.django_db
def test_describe_user_hashes_id(rf, user):
    request = rf.get('/api/diet/entries/')
    request.user = user

    described = describe_user(request)

    assert described.startswith('user_')
    assert str(user.pk) != described.removeprefix('user_')
    assert len(described) == len('user_') + 12
