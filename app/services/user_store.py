"""User record store backed by SQLAlchemy Core."""

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dates import normalize_date_of_birth
from app.core.exceptions import EmailExistsException, UserNotFoundException
from app.models.users import users
from app.schemas.users import UserInDB

logger = structlog.get_logger(__name__)

_DATETIME_COLUMNS = ("date_of_birth", "otp_expires_at", "created_at", "updated_at")


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


class UserStore:
    """Persists user records keyed by their unique email."""

    def __init__(self, db: AsyncSession):
        """Initialize store with a database session."""
        self.db = db

    @staticmethod
    def _to_model(row: Any) -> UserInDB:
        data = dict(row)
        for column in _DATETIME_COLUMNS:
            data[column] = _as_utc(data.get(column))
        return UserInDB.model_validate(data)

    @staticmethod
    def _prepare_for_save(user: UserInDB, now: datetime) -> dict[str, Any]:
        """Pre-save transformation applied on every write."""
        return {
            "first_name": user.first_name,
            "last_name": user.last_name,
            "email": user.email,
            "password_hash": user.password_hash,
            # No-op for values that are already UTC instants
            "date_of_birth": normalize_date_of_birth(user.date_of_birth),
            "gender_preference": user.gender_preference.value,
            "is_verified": user.is_verified,
            "otp": user.otp,
            "otp_expires_at": user.otp_expires_at,
            "updated_at": now,
        }

    async def find_by_email(self, email: str) -> UserInDB | None:
        """Get user by exact email."""
        query = select(users).where(users.c.email == email)
        result = await self.db.execute(query)
        user = result.mappings().first()
        return self._to_model(user) if user else None

    async def save(self, user: UserInDB) -> UserInDB:
        """
        Insert a new user or update an existing one.

        Args:
            user: Record to persist; records without an id are inserted

        Returns:
            The stored record as read back from the database

        Raises:
            EmailExistsException: If the write violates email uniqueness
            UserNotFoundException: If an update targets a record that no longer exists
        """
        now = datetime.now(UTC)
        values = self._prepare_for_save(user, now)

        if user.id is None:
            query = (
                users.insert()
                .values(id=uuid4(), created_at=now, **values)
                .returning(users)
            )
        else:
            query = users.update().where(users.c.id == user.id).values(**values).returning(users)

        try:
            result = await self.db.execute(query)
            row = result.mappings().first()
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning("user_save_conflict", email=user.email, error=str(e.orig))
            raise EmailExistsException() from e

        if not row:
            raise UserNotFoundException()

        return self._to_model(row)
