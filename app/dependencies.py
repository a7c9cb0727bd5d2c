"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.security import TokenSettings
from app.database import get_db
from app.services.auth_service import AuthService
from app.services.notification_service import LoggingOtpNotifier, OtpNotifier
from app.services.user_store import UserStore


def get_user_store(db: Annotated[AsyncSession, Depends(get_db)]) -> UserStore:
    """Get a user store bound to the request's database session."""
    return UserStore(db)


def get_otp_notifier(
    app_settings: Annotated[Settings, Depends(get_settings)],
) -> OtpNotifier:
    """Get the OTP delivery channel."""
    return LoggingOtpNotifier(include_code=app_settings.should_log_otp_codes)


def get_token_settings(
    app_settings: Annotated[Settings, Depends(get_settings)],
) -> TokenSettings:
    """Get session token signing configuration."""
    return TokenSettings.from_settings(app_settings)


def get_auth_service(
    store: Annotated[UserStore, Depends(get_user_store)],
    notifier: Annotated[OtpNotifier, Depends(get_otp_notifier)],
    token_settings: Annotated[TokenSettings, Depends(get_token_settings)],
    app_settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    """Get the auth service wired to the request's store."""
    return AuthService(
        store=store,
        notifier=notifier,
        token_settings=token_settings,
        otp_ttl=app_settings.otp_ttl,
        min_password_length=app_settings.password_min_length,
    )


# Type aliases for dependency injection
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
