"""Tests for OTP delivery."""

from unittest.mock import MagicMock

import pytest

from app.config import Settings
from app.dependencies import get_otp_notifier
from app.services import notification_service
from app.services.notification_service import LoggingOtpNotifier


@pytest.mark.asyncio
async def test_logging_notifier_hides_code_by_default(monkeypatch):
    """Test the dispatch is logged without the code unless asked."""
    logger = MagicMock()
    monkeypatch.setattr(notification_service, "logger", logger)

    await LoggingOtpNotifier().send("a@x.com", 123456)

    logger.info.assert_called_once_with("otp_dispatched", email="a@x.com", channel="log")


@pytest.mark.asyncio
async def test_logging_notifier_can_include_code(monkeypatch):
    """Test development mode logs the code itself."""
    logger = MagicMock()
    monkeypatch.setattr(notification_service, "logger", logger)

    await LoggingOtpNotifier(include_code=True).send("a@x.com", 123456)

    logger.info.assert_called_once_with(
        "otp_dispatched", email="a@x.com", otp=123456, channel="log"
    )


@pytest.mark.parametrize(
    ("environment", "flag", "expected"),
    [
        ("development", None, True),
        ("production", None, False),
        ("production", True, True),
        ("development", False, False),
    ],
)
def test_notifier_code_logging_follows_settings(environment, flag, expected):
    """Test codes are only logged outside production unless configured."""
    kwargs = {"ENVIRONMENT": environment}
    if flag is not None:
        kwargs["OTP_LOG_CODES"] = flag
    app_settings = Settings(
        DATABASE_URL="postgresql://localhost/db",
        JWT_SECRET_KEY="secret",
        **kwargs,
    )

    notifier = get_otp_notifier(app_settings)

    assert isinstance(notifier, LoggingOtpNotifier)
    assert notifier.include_code is expected
