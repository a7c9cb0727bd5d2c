"""Authentication service for signup, OTP verification and login."""

import re
import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import structlog

from app.core.exceptions import (
    AlreadyVerifiedException,
    EmailAlreadyVerifiedException,
    EmailExistsException,
    InvalidCredentialsException,
    InvalidOrExpiredOtpException,
    MissingFieldException,
    NotVerifiedException,
    UserNotFoundException,
)
from app.core.security import (
    TokenSettings,
    create_session_token,
    get_password_hash,
    verify_password,
)
from app.core.validation import validate_registration
from app.schemas.users import (
    LoginRequest,
    RegisterRequest,
    UserInDB,
    VerifyOtpRequest,
)
from app.services.notification_service import OtpNotifier
from app.services.user_store import UserStore

logger = structlog.get_logger(__name__)

OTP_MIN = 100000
OTP_MAX = 999999

_OTP_DIGITS_RE = re.compile(r"[0-9]+")


def generate_otp() -> int:
    """Generate a uniformly random 6-digit code."""
    return OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1)


def _parse_otp(value: int | str) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    digits = value.strip()
    if not _OTP_DIGITS_RE.fullmatch(digits):
        return None
    return int(digits)


class AuthService:
    """Signup, OTP verification and login decisions over a user store."""

    def __init__(
        self,
        store: UserStore,
        notifier: OtpNotifier,
        token_settings: TokenSettings,
        otp_ttl: timedelta = timedelta(minutes=5),
        min_password_length: int = 6,
        clock: Callable[[], datetime] | None = None,
        otp_generator: Callable[[], int] = generate_otp,
    ):
        """
        Initialize auth service.

        Args:
            store: User record store
            notifier: OTP delivery channel
            token_settings: Session token signing configuration
            otp_ttl: How long an issued OTP stays valid
            min_password_length: Shortest accepted password
            clock: Returns the current aware UTC time
            otp_generator: Produces new OTP codes
        """
        self.store = store
        self.notifier = notifier
        self.token_settings = token_settings
        self.otp_ttl = otp_ttl
        self.min_password_length = min_password_length
        self.clock = clock or (lambda: datetime.now(UTC))
        self.otp_generator = otp_generator

    async def register_user(self, payload: RegisterRequest) -> UserInDB:
        """
        Create an unverified user without issuing an OTP.

        Raises:
            BadRequestException: First failed validation rule
            EmailExistsException: If any user already has this email
        """
        data = validate_registration(payload, self.min_password_length)

        if await self.store.find_by_email(data.email):
            raise EmailExistsException()

        user = UserInDB(
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            password_hash=get_password_hash(data.password),
            date_of_birth=data.date_of_birth,
            gender_preference=data.gender_preference,
            is_verified=False,
        )
        user = await self.store.save(user)

        logger.info("user_registered", user_id=str(user.id), flow="direct")
        return user

    async def send_otp(self, payload: RegisterRequest) -> None:
        """
        Create or refresh an unverified signup and dispatch a new OTP.

        An unverified account is overwritten with the submitted details so a
        user can restart signup before verifying.

        Raises:
            BadRequestException: First failed validation rule
            EmailAlreadyVerifiedException: If the email belongs to a verified user
        """
        data = validate_registration(payload, self.min_password_length)

        user = await self.store.find_by_email(data.email)
        if user and user.is_verified:
            raise EmailAlreadyVerifiedException()

        otp = self.otp_generator()
        expires_at = self.clock() + self.otp_ttl
        password_hash = get_password_hash(data.password)

        if user is None:
            user = UserInDB(
                first_name=data.first_name,
                last_name=data.last_name,
                email=data.email,
                password_hash=password_hash,
                date_of_birth=data.date_of_birth,
                gender_preference=data.gender_preference,
                is_verified=False,
            )
        else:
            user.first_name = data.first_name
            user.last_name = data.last_name
            user.password_hash = password_hash
            user.date_of_birth = data.date_of_birth
            user.gender_preference = data.gender_preference
            user.is_verified = False

        user.set_otp(otp, expires_at)
        user = await self.store.save(user)
        logger.info("otp_issued", user_id=str(user.id), expires_at=expires_at.isoformat())

        try:
            await self.notifier.send(data.email, otp)
        except Exception as e:
            # Delivery is best-effort; the code is stored and can be re-issued
            logger.error("otp_delivery_failed", user_id=str(user.id), error=str(e))

    async def verify_otp(self, payload: VerifyOtpRequest) -> UserInDB:
        """
        Mark a user verified when the submitted OTP matches and has not expired.

        Raises:
            MissingFieldException: If email or otp is missing
            UserNotFoundException: If no user has this email
            AlreadyVerifiedException: If the user is already verified
            InvalidOrExpiredOtpException: For a wrong, expired or absent code
        """
        if not payload.email or not payload.otp:
            raise MissingFieldException("Email and OTP are required.")

        user = await self.store.find_by_email(payload.email)
        if user is None:
            raise UserNotFoundException()

        if user.is_verified:
            raise AlreadyVerifiedException()

        candidate = _parse_otp(payload.otp)
        now = self.clock()
        if (
            candidate is None
            or user.otp is None
            or candidate != user.otp
            or user.otp_expires_at is None
            or user.otp_expires_at <= now
        ):
            logger.info("otp_verification_failed", user_id=str(user.id))
            raise InvalidOrExpiredOtpException()

        user.is_verified = True
        user.clear_otp()
        user = await self.store.save(user)

        logger.info("otp_verified", user_id=str(user.id))
        return user

    async def login(self, payload: LoginRequest) -> str:
        """
        Authenticate a verified user and issue a session token.

        Returns:
            Signed session token carrying userId and email

        Raises:
            MissingFieldException: If email or password is missing
            InvalidCredentialsException: Unknown email or wrong password
            NotVerifiedException: If the account has not completed OTP verification
        """
        if not payload.email or not payload.password:
            raise MissingFieldException("Email and password are required.")

        user = await self.store.find_by_email(payload.email)
        if user is None:
            logger.info("login_failed", reason="unknown_email")
            raise InvalidCredentialsException()

        if not user.is_verified:
            logger.info("login_failed", reason="not_verified", user_id=str(user.id))
            raise NotVerifiedException()

        if not verify_password(payload.password, user.password_hash):
            logger.info("login_failed", reason="wrong_password", user_id=str(user.id))
            raise InvalidCredentialsException()

        user_id = str(user.id)
        token = create_session_token(
            data={"sub": user_id, "userId": user_id, "email": user.email},
            token_settings=self.token_settings,
            now=self.clock(),
        )

        logger.info("login_succeeded", user_id=user_id)
        return token
