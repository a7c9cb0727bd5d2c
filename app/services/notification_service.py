"""OTP delivery.

Outbound email is not wired up yet; the shipped notifier records the dispatch
in the structured log so codes can be picked up during development.
"""

from typing import Protocol

import structlog

logger = structlog.get_logger(__name__)


class OtpNotifier(Protocol):
    """Delivers a one-time password to the owner of an email address."""

    async def send(self, email: str, otp: int) -> None:
        """Send the code; implementations may raise on delivery failure."""
        ...


class LoggingOtpNotifier:
    """Notifier that only writes the dispatch to the log."""

    def __init__(self, include_code: bool = False):
        """Initialize notifier.

        Args:
            include_code: Put the OTP itself in the log line (development only)
        """
        self.include_code = include_code

    async def send(self, email: str, otp: int) -> None:
        """Log the OTP dispatch."""
        if self.include_code:
            logger.info("otp_dispatched", email=email, otp=otp, channel="log")
        else:
            logger.info("otp_dispatched", email=email, channel="log")
