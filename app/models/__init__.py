"""Database models."""

from app.models.users import metadata, users

__all__ = [
    "metadata",
    "users",
]
