"""Registration input validation."""

import email_validator
from email_validator import EmailNotValidError, validate_email
from passlib.utils import MAX_PASSWORD_SIZE

from app.core.dates import normalize_date_of_birth
from app.core.exceptions import (
    AppException,
    InvalidEmailException,
    InvalidEnumException,
    MissingFieldException,
    WeakPasswordException,
)
from app.schemas.users import GenderPreference, RegisterRequest, RegistrationData

REQUIRED_REGISTRATION_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "password",
    "date_of_birth",
    "gender_preference",
)

GENDER_PREFERENCES = frozenset(item.value for item in GenderPreference)

# Longest secret passlib will hash or verify
PASSWORD_MAX_LENGTH = MAX_PASSWORD_SIZE

# Addresses are checked for grammar only, so reserved names like .local and .test pass
email_validator.SPECIAL_USE_DOMAIN_NAMES.clear()


def is_valid_email(email: str) -> bool:
    """Check an address against the standard email grammar (no DNS lookups)."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _check_registration(payload: RegisterRequest, min_password_length: int) -> RegistrationData:
    if any(not getattr(payload, name) for name in REQUIRED_REGISTRATION_FIELDS):
        raise MissingFieldException()

    if not is_valid_email(payload.email):
        raise InvalidEmailException()

    if len(payload.password) < min_password_length:
        raise WeakPasswordException(
            f"Password must be at least {min_password_length} characters."
        )
    if len(payload.password) > PASSWORD_MAX_LENGTH:
        raise WeakPasswordException(
            f"Password must be at most {PASSWORD_MAX_LENGTH} characters."
        )

    if payload.gender_preference not in GENDER_PREFERENCES:
        raise InvalidEnumException()

    # Raises InvalidDateException for anything that is not a real calendar date
    date_of_birth = normalize_date_of_birth(payload.date_of_birth)

    return RegistrationData(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
        date_of_birth=date_of_birth,
        gender_preference=GenderPreference(payload.gender_preference),
    )


def find_registration_error(
    payload: RegisterRequest,
    min_password_length: int = 6,
) -> AppException | None:
    """Return the first rule the payload violates, or None when it is valid."""
    try:
        _check_registration(payload, min_password_length)
    except AppException as e:
        return e
    return None


def validate_registration(
    payload: RegisterRequest,
    min_password_length: int = 6,
) -> RegistrationData:
    """
    Validate a registration payload.

    Rules are checked in order and the first failure wins: required fields,
    email format, password length (bounded above by what passlib accepts),
    gender preference, date of birth.

    Args:
        payload: Raw registration request
        min_password_length: Shortest accepted password

    Returns:
        Validated registration data with the date of birth normalized to UTC

    Raises:
        BadRequestException: The subclass matching the first violated rule
    """
    return _check_registration(payload, min_password_length)
