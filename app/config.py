"""Application configuration."""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="null",
    )

    # Application
    app_name: str = Field(default="Signup Auth API", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    api_v1_prefix: str = Field(default="/api/v1", alias="API_V1_PREFIX")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    reload: bool = Field(default=False, alias="RELOAD")

    # Database
    database_url: str = Field(..., alias="DATABASE_URL")

    # JWT session tokens
    jwt_secret_key: str = Field(..., min_length=1, alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    # Session tokens are valid for one day
    session_token_expire_minutes: int = Field(
        default=60 * 24, gt=0, alias="SESSION_TOKEN_EXPIRE_MINUTES"
    )

    # Credentials and OTP
    password_min_length: int = Field(default=6, ge=1, alias="PASSWORD_MIN_LENGTH")
    bcrypt_rounds: int = Field(default=10, ge=4, le=31, alias="BCRYPT_ROUNDS")
    otp_expire_minutes: int = Field(default=5, gt=0, alias="OTP_EXPIRE_MINUTES")
    otp_log_codes: bool | None = Field(
        default=None,
        alias="OTP_LOG_CODES",
        description="Include OTP codes in notifier log lines (defaults to on outside production)",
    )

    # CORS
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def should_log_otp_codes(self) -> bool:
        """Whether the log-only notifier may print the code itself."""
        if self.otp_log_codes is None:
            return not self.is_production
        return self.otp_log_codes

    @property
    def session_token_expires(self) -> timedelta:
        return timedelta(minutes=self.session_token_expire_minutes)

    @property
    def otp_ttl(self) -> timedelta:
        return timedelta(minutes=self.otp_expire_minutes)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]


# Global settings instance; a missing JWT_SECRET_KEY or DATABASE_URL fails here at startup
settings = get_settings()
