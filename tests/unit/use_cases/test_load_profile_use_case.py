"""
Unit tests for LoadProfileUseCase
"""
from datetime import timedelta

import pytest

from src.app.use_cases.users import LoadProfileUseCase
from src.domain.base import utcnow
from src.domain.entities import SessionGrant
from tests.fixtures.users import build_user


def logged_in(user, signer, settings, expires_in=timedelta(minutes=10)):
    token = signer.sign(
        {"sub": str(user.id), "email": user.email}, settings.session_ttl, settings.jwt_secret
    )
    now = utcnow()
    user.grant_session(SessionGrant(token=token, issued_at=now, expires_at=now + expires_in))
    return token


@pytest.mark.asyncio
async def test_profile_returns_session_claims(mock_uow, signer, settings):
    user = build_user()
    token = logged_in(user, signer, settings)
    mock_uow.users.get_by_id.return_value = user

    result = await LoadProfileUseCase(mock_uow, signer, settings).execute(token)

    assert result.is_ok()
    assert result.value.user_id == str(user.id)
    assert result.value.email == "a@x.com"
    mock_uow.users.get_by_id.assert_called_once_with(user.id)


@pytest.mark.asyncio
async def test_profile_rejects_token_after_logout(mock_uow, signer, settings):
    user = build_user()
    token = logged_in(user, signer, settings)
    user.clear_session()
    mock_uow.users.get_by_id.return_value = user

    result = await LoadProfileUseCase(mock_uow, signer, settings).execute(token)

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_profile_rejects_replaced_session(mock_uow, signer, settings):
    user = build_user()
    old_token = logged_in(user, signer, settings)
    now = utcnow()
    user.grant_session(
        SessionGrant(token="newer.session.token", issued_at=now, expires_at=now + timedelta(minutes=10))
    )
    mock_uow.users.get_by_id.return_value = user

    result = await LoadProfileUseCase(mock_uow, signer, settings).execute(old_token)

    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_profile_rejects_stored_expiry(mock_uow, signer, settings):
    user = build_user()
    token = logged_in(user, signer, settings, expires_in=timedelta(seconds=-1))
    mock_uow.users.get_by_id.return_value = user

    result = await LoadProfileUseCase(mock_uow, signer, settings).execute(token)

    assert result.error.code == "TOKEN_EXPIRED"


@pytest.mark.asyncio
async def test_profile_rejects_token_signed_with_other_secret(mock_uow, signer, settings):
    token = signer.sign({"sub": "whatever"}, timedelta(minutes=5), settings.reset_token_secret)

    result = await LoadProfileUseCase(mock_uow, signer, settings).execute(token)

    assert result.error.code == "INVALID_TOKEN"
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_profile_rejects_non_uuid_subject(mock_uow, signer, settings):
    token = signer.sign({"sub": "not-a-uuid"}, timedelta(minutes=5), settings.jwt_secret)

    result = await LoadProfileUseCase(mock_uow, signer, settings).execute(token)

    assert result.error.code == "INVALID_TOKEN"
