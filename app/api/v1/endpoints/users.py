"""User signup and login endpoints."""

from fastapi import APIRouter, status

from app.dependencies import AuthServiceDep
from app.schemas.users import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    UserCreatedResponse,
    UserResponse,
    VerifyOtpRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "/create",
    response_model=UserCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register without OTP",
)
async def create_user(
    payload: RegisterRequest,
    auth_service: AuthServiceDep,
) -> UserCreatedResponse:
    """
    Create an unverified user directly.

    No OTP is issued on this path, so the account cannot complete
    verification until an OTP is requested through /send-otp.
    """
    user = await auth_service.register_user(payload)

    return UserCreatedResponse(
        message="User created successfully.",
        user=UserResponse.model_validate(user),
    )


@router.post("/send-otp", response_model=MessageResponse, summary="Start signup and send OTP")
async def send_otp(payload: RegisterRequest, auth_service: AuthServiceDep) -> MessageResponse:
    """Create or refresh an unverified signup and dispatch a one-time password."""
    await auth_service.send_otp(payload)
    return MessageResponse(message="OTP sent to your email address.")


@router.post("/verify-otp", response_model=MessageResponse, summary="Verify signup OTP")
async def verify_otp(payload: VerifyOtpRequest, auth_service: AuthServiceDep) -> MessageResponse:
    """Verify an account with the one-time password sent to its email."""
    await auth_service.verify_otp(payload)
    return MessageResponse(message="Account verified successfully.")


@router.post("/login", response_model=LoginResponse, summary="Log in")
async def login(payload: LoginRequest, auth_service: AuthServiceDep) -> LoginResponse:
    """Authenticate a verified user and return a session token."""
    token = await auth_service.login(payload)
    return LoginResponse(message="Login successful.", token=token)
