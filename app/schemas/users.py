"""User schemas for request/response validation."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GenderPreference(str, Enum):
    """Accepted gender preference values."""

    MALE = "Male"
    FEMALE = "Female"
    NO_PREFERENCE = "No preference"


class RegisterRequest(BaseModel):
    """Registration payload for both the direct and the OTP signup flows.

    Every field is optional at the schema level so that missing or empty
    values are reported by the registration validator, in its rule order.
    """

    model_config = ConfigDict(populate_by_name=True)

    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    email: str | None = None
    password: str | None = None
    date_of_birth: str | None = Field(default=None, alias="dateOfBirth")
    gender_preference: str | None = Field(default=None, alias="genderPreference")


class VerifyOtpRequest(BaseModel):
    """OTP verification payload."""

    email: str | None = None
    otp: int | str | None = None


class LoginRequest(BaseModel):
    """Login payload."""

    email: str | None = None
    password: str | None = None


class RegistrationData(BaseModel):
    """Registration payload after validation and date normalization."""

    first_name: str
    last_name: str
    email: str
    password: str = Field(..., repr=False)
    date_of_birth: datetime
    gender_preference: GenderPreference


class UserInDB(BaseModel):
    """User record as held by the user store."""

    id: UUID | None = None
    first_name: str
    last_name: str
    email: str
    password_hash: str = Field(..., repr=False)
    date_of_birth: datetime
    gender_preference: GenderPreference
    is_verified: bool = False
    otp: int | None = Field(default=None, repr=False)
    otp_expires_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)

    def set_otp(self, otp: int, expires_at: datetime) -> None:
        """Attach a fresh OTP; code and expiry are always set together."""
        self.otp = otp
        self.otp_expires_at = expires_at

    def clear_otp(self) -> None:
        """Drop the OTP; code and expiry are always cleared together."""
        self.otp = None
        self.otp_expires_at = None


class UserResponse(BaseModel):
    """Public user profile; never carries the password hash or OTP fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    first_name: str
    last_name: str
    email: str
    date_of_birth: datetime
    gender_preference: GenderPreference
    is_verified: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MessageResponse(BaseModel):
    """Acknowledgement response."""

    message: str


class UserCreatedResponse(MessageResponse):
    """Direct registration response."""

    user: UserResponse


class LoginResponse(MessageResponse):
    """Successful login response."""

    token: str
    token_type: str = "bearer"
