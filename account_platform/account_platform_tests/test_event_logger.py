"""
Unit tests for event logger utility.
"""
import logging

import pytest
from unittest.mock import Mock

from account_platform.account_platform.account_service.utils.event_logger import client_ip, log_account_event

LOGGER_NAME = "account_platform.account_platform.account_service.utils.event_logger"


@pytest.fixture
def mock_request():
    """Create a mock FastAPI Request object."""
    request = Mock()
    request.client = Mock()
    request.client.host = "192.168.1.1"
    request.headers = {"user-agent": "Mozilla/5.0 Test Browser"}
    return request


def test_log_account_event_writes_log_line(mock_request, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        log_account_event("auth_success", "alice", mock_request, user_id=7)

    assert len(caplog.records) == 1
    line = caplog.records[0].getMessage()
    assert line.startswith("ACCOUNT auth_success name=alice ip=192.168.1.1")
    assert line.endswith("user_id=7")


def test_log_account_event_never_logs_password_field(mock_request, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        log_account_event("auth_failure", "alice", mock_request, reason="InvalidPassword")

    assert "secret" not in caplog.text
    assert "reason=InvalidPassword" in caplog.text


def test_log_account_event_rejects_unknown_type(mock_request):
    with pytest.raises(ValueError):
        log_account_event("password_reset", "alice", mock_request)


def test_client_ip_uses_forwarded_for_without_client():
    request = Mock()
    request.client = None
    request.headers = {"x-forwarded-for": "10.0.0.5, 172.16.0.1"}

    assert client_ip(request) == "10.0.0.5"


def test_client_ip_unknown():
    request = Mock()
    request.client = None
    request.headers = {}

    assert client_ip(request) is None
