"""Tests for sensitive data masking in logs."""

import logging

import pytest

from plateshare.config import Settings
from plateshare.logging_config import SensitiveDataFilter, setup_logging


def _record(msg, *args) -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args or None, None)


@pytest.fixture
def log_filter():
    return SensitiveDataFilter()


@pytest.mark.parametrize(
    "message,secret",
    [
        ("Authorization: Bearer abc.def-ghi", "abc.def-ghi"),
        ("token eyJhbGciOiJIUzI1NiJ9.eyJzdWIiOiIxIn0.sig", "eyJhbGciOiJIUzI1NiJ9"),
        ("key sk_test_51Habc123", "sk_test_51Habc123"),
        ("secret pi_3Nabc_secret_XyZ987", "pi_3Nabc_secret_XyZ987"),
        ('{"api_key": "hunter2"}', "hunter2"),
    ],
)
def test_masks_secrets(log_filter, message, secret):
    record = _record(message)

    assert log_filter.filter(record) is True
    assert secret not in record.getMessage()


def test_masks_format_args(log_filter):
    record = _record("Calling Stripe with %s", "sk_live_abcdef")

    log_filter.filter(record)

    assert "sk_live_abcdef" not in record.getMessage()


def test_leaves_ordinary_messages(log_filter):
    record = _record("Pickup request 123 set to Accepted")

    log_filter.filter(record)

    assert record.getMessage() == "Pickup request 123 set to Accepted"


def test_emails_kept_by_default(log_filter):
    record = _record("Registered ann@example.com")

    log_filter.filter(record)

    assert record.getMessage() == "Registered ann@example.com"


def test_masks_emails_when_enabled():
    record = _record("Request withdrawn by %s", "ann@example.com")

    SensitiveDataFilter(mask_emails=True).filter(record)

    assert record.getMessage() == "Request withdrawn by a***@example.com"


def test_setup_logging_installs_filter():
    settings = Settings(debug=False, log_level="warning", log_mask_emails=True)

    try:
        setup_logging(settings)
        root = logging.getLogger()
        assert root.level == logging.WARNING
        filters = [f for handler in root.handlers for f in handler.filters]
        assert any(isinstance(f, SensitiveDataFilter) for f in filters)
    finally:
        logging.basicConfig(level=logging.INFO, force=True)
