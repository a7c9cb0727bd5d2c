"""Custom application exceptions.

Every exception carries an HTTP status code, a human readable message and a
machine readable ``error_code`` that clients can switch on.
"""


class AppException(Exception):
    """Base application exception."""

    error_code = "Unexpected"

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class BadRequestException(AppException):
    """Bad request exception."""

    error_code = "BadRequest"

    def __init__(self, message: str = "Bad request"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)


class ForbiddenException(AppException):
    """Forbidden access exception."""

    error_code = "Forbidden"

    def __init__(self, message: str = "Forbidden"):
        """Initialize with 403 status code."""
        super().__init__(message, status_code=403)


class NotFoundException(AppException):
    """Resource not found exception."""

    error_code = "NotFound"

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class ConflictException(AppException):
    """Conflict exception."""

    error_code = "Conflict"

    def __init__(self, message: str = "Conflict"):
        """Initialize with 409 status code."""
        super().__init__(message, status_code=409)


# Validation failures, reported in the order the validator checks them


class MissingFieldException(BadRequestException):
    error_code = "MissingField"

    def __init__(self, message: str = "All fields are required."):
        super().__init__(message)


class InvalidEmailException(BadRequestException):
    error_code = "InvalidEmail"

    def __init__(self, message: str = "Invalid email format."):
        super().__init__(message)


class WeakPasswordException(BadRequestException):
    error_code = "WeakPassword"

    def __init__(self, message: str = "Password must be at least 6 characters."):
        super().__init__(message)


class InvalidEnumException(BadRequestException):
    error_code = "InvalidEnum"

    def __init__(self, message: str = "Invalid gender preference."):
        super().__init__(message)


class InvalidDateException(BadRequestException):
    error_code = "InvalidDate"

    def __init__(self, message: str = "Invalid date of birth."):
        super().__init__(message)


class MalformedRequestException(BadRequestException):
    """Request body could not be parsed into the expected shape."""

    error_code = "MalformedRequest"

    def __init__(self, message: str = "Request validation failed"):
        super().__init__(message)


# Account state


class EmailExistsException(ConflictException):
    """Raised when an email is already claimed, including store-level unique violations."""

    error_code = "EmailExists"

    def __init__(self, message: str = "Email already exists."):
        super().__init__(message)


class EmailAlreadyVerifiedException(ConflictException):
    error_code = "EmailAlreadyVerified"

    def __init__(self, message: str = "Email already exists and is verified."):
        super().__init__(message)


class UserNotFoundException(NotFoundException):
    error_code = "NotFound"

    def __init__(self, message: str = "User not found."):
        super().__init__(message)


class AlreadyVerifiedException(BadRequestException):
    error_code = "AlreadyVerified"

    def __init__(self, message: str = "User already verified."):
        super().__init__(message)


class InvalidOrExpiredOtpException(BadRequestException):
    """Wrong and expired codes share this error so callers cannot tell them apart."""

    error_code = "InvalidOrExpiredOtp"

    def __init__(self, message: str = "Invalid or expired OTP."):
        super().__init__(message)


# Authentication


class InvalidCredentialsException(BadRequestException):
    """Unknown email and wrong password share this error."""

    error_code = "InvalidCredentials"

    def __init__(self, message: str = "Invalid email or password."):
        super().__init__(message)


class NotVerifiedException(ForbiddenException):
    error_code = "NotVerified"

    def __init__(self, message: str = "Please verify your email with OTP before logging in."):
        super().__init__(message)
