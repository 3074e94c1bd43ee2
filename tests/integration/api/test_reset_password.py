from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.base import utcnow
from src.domain.entities import User
from tests.integration.api.flows import forgot_password, login, signup


async def load_user(db_session, email="a@x.com") -> User:
    return (await db_session.exec(select(User).where(User.email == email))).one()


@pytest.mark.asyncio
async def test_reset_with_otp(client: AsyncClient, db_session, mailer):
    """Reset Password with OTP

    Given I received a reset OTP
    When I submit it with my email and a new password
    Then the password is changed and the whole reset state is cleared
    """
    await signup(client)
    otp, _ = await forgot_password(client, mailer)

    response = await client.post(
        "/auth/reset-password?method=otp",
        json={"email": "a@x.com", "otp": otp, "newPassword": "newpass123"},
    )

    assert response.status_code == 200
    assert response.json() == {"ok": True, "msg": "Password successfully reset."}

    user = await load_user(db_session)
    assert (user.reset_otp, user.reset_token, user.reset_expires_at) == (None, None, None)
    assert user.session_token is None


@pytest.mark.asyncio
async def test_reset_with_token(client: AsyncClient, mailer):
    await signup(client)
    _, token = await forgot_password(client, mailer)

    response = await client.post(
        "/auth/reset-password?method=token",
        json={"token": token, "newPassword": "newpass123"},
    )

    assert response.status_code == 200
    assert (await login(client, password="newpass123")).status_code == 200
    assert (await login(client)).status_code == 401


@pytest.mark.asyncio
async def test_otp_use_invalidates_token(client: AsyncClient, mailer):
    await signup(client)
    otp, token = await forgot_password(client, mailer)

    await client.post(
        "/auth/reset-password?method=otp",
        json={"email": "a@x.com", "otp": otp, "newPassword": "newpass123"},
    )
    response = await client.post(
        "/auth/reset-password?method=token",
        json={"token": token, "newPassword": "another123"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_token_use_invalidates_otp(client: AsyncClient, mailer):
    await signup(client)
    otp, token = await forgot_password(client, mailer)

    await client.post(
        "/auth/reset-password?method=token",
        json={"token": token, "newPassword": "newpass123"},
    )
    response = await client.post(
        "/auth/reset-password?method=otp",
        json={"email": "a@x.com", "otp": otp, "newPassword": "another123"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_OTP"


@pytest.mark.asyncio
async def test_wrong_otp_keeps_challenge(client: AsyncClient, db_session, mailer):
    await signup(client)
    otp, _ = await forgot_password(client, mailer)
    wrong = "000000" if otp != "000000" else "111111"

    response = await client.post(
        "/auth/reset-password?method=otp",
        json={"email": "a@x.com", "otp": wrong, "newPassword": "newpass123"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_OTP"
    user = await load_user(db_session)
    assert user.reset_otp == otp
    assert user.reset_attempts == 1

    retry = await client.post(
        "/auth/reset-password?method=otp",
        json={"email": "a@x.com", "otp": otp, "newPassword": "newpass123"},
    )
    assert retry.status_code == 200


@pytest.mark.asyncio
async def test_otp_attempt_limit(client: AsyncClient, mailer, auth_settings):
    await signup(client)
    otp, _ = await forgot_password(client, mailer)
    wrong = "000000" if otp != "000000" else "111111"

    for _ in range(auth_settings.reset_max_attempts):
        await client.post(
            "/auth/reset-password?method=otp",
            json={"email": "a@x.com", "otp": wrong, "newPassword": "newpass123"},
        )

    response = await client.post(
        "/auth/reset-password?method=otp",
        json={"email": "a@x.com", "otp": otp, "newPassword": "newpass123"},
    )

    assert response.status_code == 429
    assert response.json()["error"]["code"] == "TOO_MANY_ATTEMPTS"

    # A new cycle starts from zero
    new_otp, _ = await forgot_password(client, mailer)
    response = await client.post(
        "/auth/reset-password?method=otp",
        json={"email": "a@x.com", "otp": new_otp, "newPassword": "newpass123"},
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_expired_otp(client: AsyncClient, db_session, mailer):
    await signup(client)
    otp, _ = await forgot_password(client, mailer)

    user = await load_user(db_session)
    user.reset_expires_at = utcnow() - timedelta(seconds=1)
    db_session.add(user)
    await db_session.commit()

    response = await client.post(
        "/auth/reset-password?method=otp",
        json={"email": "a@x.com", "otp": otp, "newPassword": "newpass123"},
    )

    assert response.status_code == 410
    assert response.json()["error"]["code"] == "OTP_EXPIRED"


@pytest.mark.asyncio
async def test_expired_reset_blocks_token(client: AsyncClient, db_session, mailer):
    await signup(client)
    _, token = await forgot_password(client, mailer)

    user = await load_user(db_session)
    user.reset_expires_at = utcnow() - timedelta(seconds=1)
    db_session.add(user)
    await db_session.commit()

    response = await client.post(
        "/auth/reset-password?method=token",
        json={"token": token, "newPassword": "newpass123"},
    )

    assert response.status_code == 410
    assert response.json()["error"]["code"] == "TOKEN_EXPIRED"


@pytest.mark.asyncio
async def test_tampered_token(client: AsyncClient, mailer):
    await signup(client)
    _, token = await forgot_password(client, mailer)

    response = await client.post(
        "/auth/reset-password?method=token",
        json={"token": token.rsplit(".", 1)[0] + ".forged", "newPassword": "newpass123"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_otp_for_unknown_user(client: AsyncClient):
    response = await client.post(
        "/auth/reset-password?method=otp",
        json={"email": "ghost@x.com", "otp": "123456", "newPassword": "newpass123"},
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "query, body, message",
    [
        (
            "",
            {"email": "a@x.com", "otp": "123456", "newPassword": "newpass123"},
            'The reset method must be "otp" or "token".',
        ),
        (
            "?method=otp",
            {"email": "a@x.com", "otp": "123456", "token": "a.b.c", "newPassword": "newpass123"},
            "Exactly one of OTP or Token must be provided.",
        ),
        (
            "?method=otp",
            {"email": "a@x.com", "otp": "12345", "newPassword": "newpass123"},
            "The OTP code must be a 6-digit number.",
        ),
        (
            "?method=otp",
            {"otp": "123456", "newPassword": "newpass123"},
            "The email is required when method is otp.",
        ),
        (
            "?method=token",
            {"email": "a@x.com", "otp": "123456", "newPassword": "newpass123"},
            "The token is required when method is token.",
        ),
        (
            "?method=otp",
            {"email": "a@x.com", "otp": "123456", "newPassword": "short"},
            "The new password must be between 8 and 20 characters long.",
        ),
    ],
)
async def test_reset_validation(client: AsyncClient, query, body, message):
    response = await client.post(f"/auth/reset-password{query}", json=body)

    assert response.status_code == 400
    data = response.json()
    assert data["error"]["code"] == "VALIDATION_ERROR"
    assert message in data["error"]["message"]
