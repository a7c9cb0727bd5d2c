"""Security utilities for JWT session tokens and password handling."""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import PasswordSizeError
from pydantic import BaseModel, ConfigDict, Field

from app.config import Settings, settings

# Password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


class TokenSettings(BaseModel):
    """Signing configuration handed to whoever issues session tokens."""

    model_config = ConfigDict(frozen=True)

    secret_key: str = Field(..., min_length=1)
    algorithm: str = "HS256"
    expires_delta: timedelta = timedelta(days=1)

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "TokenSettings":
        """Build token settings from application settings."""
        return cls(
            secret_key=app_settings.jwt_secret_key,
            algorithm=app_settings.jwt_algorithm,
            expires_delta=app_settings.session_token_expires,
        )


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash.

    passlib's bcrypt handler compares digests in constant time. Secrets over
    passlib's size limit can never have been hashed, so they do not match.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except PasswordSizeError:
        return False


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_session_token(
    data: dict[str, Any],
    token_settings: TokenSettings,
    now: datetime | None = None,
) -> str:
    """
    Create a signed JWT session token.

    Args:
        data: Claims to encode
        token_settings: Secret, algorithm and lifetime to sign with
        now: Issue time, defaults to the current UTC time

    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()
    issued_at = now or datetime.now(UTC)

    to_encode.update(
        {
            "exp": issued_at + token_settings.expires_delta,
            "iat": issued_at,
            "type": "access",
        }
    )

    return jwt.encode(
        to_encode,
        token_settings.secret_key,
        algorithm=token_settings.algorithm,
    )


def decode_session_token(token: str, token_settings: TokenSettings) -> dict[str, Any] | None:
    """
    Decode and validate a JWT session token.

    Args:
        token: JWT token to decode
        token_settings: Secret and algorithm the token was signed with

    Returns:
        Decoded payload or None if invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            token_settings.secret_key,
            algorithms=[token_settings.algorithm],
        )
    except JWTError:
        return None

    # Verify token type
    if payload.get("type") != "access":
        return None

    return payload
