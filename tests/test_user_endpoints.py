"""Tests for signup, OTP and login endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.core.security import TokenSettings, decode_session_token
from app.dependencies import get_otp_notifier, get_user_store
from app.main import app

PREFIX = "/api/v1/users"

SENSITIVE_KEYS = {
    "password",
    "password_hash",
    "passwordHash",
    "otp",
    "otp_expires_at",
    "otpExpiresAt",
}


def assert_no_secrets(body: dict) -> None:
    """Check no credential or OTP field appears anywhere in a response body."""
    for key, value in body.items():
        assert key not in SENSITIVE_KEYS
        if isinstance(value, dict):
            assert_no_secrets(value)


async def verify_signup(client: AsyncClient, notifier, registration_data: dict) -> None:
    response = await client.post(f"{PREFIX}/send-otp", json=registration_data)
    assert response.status_code == 200
    otp = notifier.last_code_for(registration_data["email"])
    response = await client.post(
        f"{PREFIX}/verify-otp", json={"email": registration_data["email"], "otp": otp}
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_create_user(client: AsyncClient, registration_data: dict, store) -> None:
    """Test direct registration returns the redacted profile."""
    response = await client.post(f"{PREFIX}/create", json=registration_data)

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "User created successfully."
    user = data["user"]
    assert user["email"] == registration_data["email"]
    assert user["firstName"] == "Asha"
    assert user["lastName"] == "Rao"
    assert user["genderPreference"] == "Female"
    assert user["isVerified"] is False
    assert user["dateOfBirth"].startswith("2000-01-14T18:30:00")
    assert "id" in user
    assert_no_secrets(data)
    assert registration_data["email"] in store.records


@pytest.mark.asyncio
async def test_create_user_duplicate(client: AsyncClient, registration_data: dict) -> None:
    """Test registering an existing email returns 409."""
    await client.post(f"{PREFIX}/create", json=registration_data)

    response = await client.post(f"{PREFIX}/create", json=registration_data)

    assert response.status_code == 409
    data = response.json()
    assert data["error"] == "EmailExists"
    assert data["message"] == "Email already exists."


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("overrides", "error"),
    [
        ({"firstName": ""}, "MissingField"),
        ({"email": "not-an-email"}, "InvalidEmail"),
        ({"password": "12345"}, "WeakPassword"),
        ({"genderPreference": "Unknown"}, "InvalidEnum"),
        ({"dateOfBirth": "2001-02-29"}, "InvalidDate"),
    ],
)
async def test_create_user_validation_errors(
    client: AsyncClient, registration_data: dict, overrides: dict, error: str
) -> None:
    """Test each validation rule maps to its category and a 400."""
    response = await client.post(f"{PREFIX}/create", json={**registration_data, **overrides})

    assert response.status_code == 400
    assert response.json()["error"] == error


@pytest.mark.asyncio
async def test_missing_body_fields_use_service_error(client: AsyncClient) -> None:
    """Test an empty body is reported as MissingField rather than a framework error."""
    response = await client.post(f"{PREFIX}/send-otp", json={})

    assert response.status_code == 400
    assert response.json()["error"] == "MissingField"
    assert response.json()["message"] == "All fields are required."


@pytest.mark.asyncio
async def test_malformed_body(client: AsyncClient, registration_data: dict) -> None:
    """Test wrongly typed fields are rejected without echoing input."""
    response = await client.post(
        f"{PREFIX}/login", json={"email": ["a@x.com"], "password": "hunter22"}
    )

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "MalformedRequest"
    assert "hunter22" not in response.text


@pytest.mark.asyncio
async def test_send_otp_does_not_return_code(
    client: AsyncClient, registration_data: dict, notifier
) -> None:
    """Test the OTP is dispatched but never returned."""
    response = await client.post(f"{PREFIX}/send-otp", json=registration_data)

    assert response.status_code == 200
    assert set(response.json()) == {"message"}
    otp = notifier.last_code_for(registration_data["email"])
    assert str(otp) not in response.text


@pytest.mark.asyncio
async def test_send_otp_for_verified_email(
    client: AsyncClient, registration_data: dict, notifier
) -> None:
    """Test re-issuing for a verified email conflicts."""
    await verify_signup(client, notifier, registration_data)

    response = await client.post(f"{PREFIX}/send-otp", json=registration_data)

    assert response.status_code == 409
    assert response.json()["error"] == "EmailAlreadyVerified"


@pytest.mark.asyncio
async def test_full_signup_flow(client: AsyncClient, registration_data: dict, notifier) -> None:
    """Test send OTP, verify, verify again, then log in."""
    email = registration_data["email"]
    await verify_signup(client, notifier, registration_data)
    otp = notifier.last_code_for(email)

    response = await client.post(f"{PREFIX}/verify-otp", json={"email": email, "otp": str(otp)})
    assert response.status_code == 400
    assert response.json()["error"] == "AlreadyVerified"

    response = await client.post(
        f"{PREFIX}/login", json={"email": email, "password": registration_data["password"]}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert_no_secrets(data)

    claims = decode_session_token(data["token"], TokenSettings.from_settings(settings))
    assert claims is not None
    assert claims["email"] == email
    assert claims["userId"]


@pytest.mark.asyncio
async def test_verify_otp_errors(client: AsyncClient, registration_data: dict) -> None:
    """Test verification error categories."""
    response = await client.post(f"{PREFIX}/verify-otp", json={"email": "a@x.com"})
    assert response.status_code == 400
    assert response.json()["error"] == "MissingField"

    response = await client.post(
        f"{PREFIX}/verify-otp", json={"email": "ghost@mail.com", "otp": 123456}
    )
    assert response.status_code == 404
    assert response.json()["error"] == "NotFound"

    await client.post(f"{PREFIX}/send-otp", json=registration_data)
    response = await client.post(
        f"{PREFIX}/verify-otp", json={"email": registration_data["email"], "otp": "abcdef"}
    )
    assert response.status_code == 400
    assert response.json() == {
        "error": "InvalidOrExpiredOtp",
        "message": "Invalid or expired OTP.",
        "path": f"http://test{PREFIX}/verify-otp",
    }


@pytest.mark.asyncio
async def test_login_errors(client: AsyncClient, registration_data: dict, notifier) -> None:
    """Test login error categories and their blurring."""
    email = registration_data["email"]

    response = await client.post(f"{PREFIX}/login", json={"email": email})
    assert response.status_code == 400
    assert response.json()["error"] == "MissingField"

    await client.post(f"{PREFIX}/send-otp", json=registration_data)
    response = await client.post(
        f"{PREFIX}/login", json={"email": email, "password": registration_data["password"]}
    )
    assert response.status_code == 403
    assert response.json()["error"] == "NotVerified"

    otp = notifier.last_code_for(email)
    await client.post(f"{PREFIX}/verify-otp", json={"email": email, "otp": otp})

    wrong_password = await client.post(
        f"{PREFIX}/login", json={"email": email, "password": "wrong-password"}
    )
    unknown_email = await client.post(
        f"{PREFIX}/login", json={"email": "ghost@mail.com", "password": "wrong-password"}
    )
    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.json()["error"] == unknown_email.json()["error"] == "InvalidCredentials"
    assert wrong_password.json()["message"] == unknown_email.json()["message"]


@pytest.mark.asyncio
async def test_unexpected_error_is_generic(registration_data: dict, notifier) -> None:
    """Test storage failures surface as a structured 500 without a traceback."""

    class BrokenStore:
        async def find_by_email(self, email):
            raise RuntimeError("connection refused")

        async def save(self, user):
            raise RuntimeError("connection refused")

    app.dependency_overrides[get_user_store] = lambda: BrokenStore()
    app.dependency_overrides[get_otp_notifier] = lambda: notifier
    try:
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(f"{PREFIX}/create", json=registration_data)
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Unexpected"
    assert data["message"] == "Server error"
    assert data["detail"] == "connection refused"
    assert "Traceback" not in response.text
