"""User model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    MetaData,
    Table,
    Text,
    Uuid,
    text,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Uuid(as_uuid=True), primary_key=True),
    # Profile
    Column("first_name", Text, nullable=False),
    Column("last_name", Text, nullable=False),
    Column("email", Text, nullable=False, unique=True, index=True),
    Column("date_of_birth", DateTime(timezone=True), nullable=False),
    Column("gender_preference", Text, nullable=False),
    # Credentials (bcrypt hash only)
    Column("password_hash", Text, nullable=False),
    # Verification state
    Column("is_verified", Boolean, nullable=False, server_default=text("false")),
    Column("otp", Integer),
    Column("otp_expires_at", DateTime(timezone=True)),
    # Audit
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    CheckConstraint(
        "gender_preference IN ('Male', 'Female', 'No preference')",
        name="ck_users_gender_preference",
    ),
    # An OTP and its expiry are set and cleared together
    CheckConstraint(
        "(otp IS NULL) = (otp_expires_at IS NULL)",
        name="ck_users_otp_pair",
    ),
)
