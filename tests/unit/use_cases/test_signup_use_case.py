"""
Unit tests for SignupUseCase
"""
from datetime import date

import pytest

from src.app.services.unit_of_work import DuplicateKeyError, PersistenceError
from src.app.use_cases.auth import SignupCommand, SignupUseCase
from tests.fixtures.users import build_user


def make_command(**overrides) -> SignupCommand:
    values = dict(
        name="Ana",
        last_name="Lopez",
        telephone="0991234567",
        date_of_birth=date(1990, 1, 31),
        email="a@x.com",
        password="pw123456",
    )
    values.update(overrides)
    return SignupCommand(**values)


@pytest.mark.asyncio
async def test_successful_signup_hashes_password(mock_uow, hasher):
    use_case = SignupUseCase(mock_uow, hasher)

    result = await use_case.execute(make_command(latitude=-0.18, longitude=-78.47))

    assert result.is_ok()
    data = result.value
    assert data.code == "01"
    assert data.user_info.email == "a@x.com"
    assert data.user_info.name == "Ana"
    assert data.user_info.last_name == "Lopez"

    created = mock_uow.users.create.call_args.args[0]
    assert created.password_hash != "pw123456"
    assert hasher.compare("pw123456", created.password_hash)
    assert created.date_of_birth == date(1990, 1, 31)
    assert created.latitude == -0.18
    assert created.session_token is None
    assert created.reset_otp is None
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_signup_response_never_exposes_hash(mock_uow, hasher):
    result = await SignupUseCase(mock_uow, hasher).execute(make_command())

    dumped = result.value.model_dump(by_alias=True)
    assert set(dumped["userInfo"]) == {"id", "name", "lastName", "email"}
    assert "password" not in str(dumped).lower()


@pytest.mark.asyncio
async def test_signup_duplicate_email(mock_uow, hasher):
    existing = build_user(email="a@x.com")
    mock_uow.users.get_by_email.return_value = existing

    result = await SignupUseCase(mock_uow, hasher).execute(make_command())

    assert result.is_err()
    assert result.error.code == "DUPLICATE_EMAIL"
    mock_uow.users.create.assert_not_called()
    mock_uow.users.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_signup_unique_violation_at_commit_is_duplicate(mock_uow, hasher):
    mock_uow.commit.side_effect = DuplicateKeyError("UNIQUE constraint failed: users.email")

    result = await SignupUseCase(mock_uow, hasher).execute(make_command())

    assert result.is_err()
    assert result.error.code == "DUPLICATE_EMAIL"


@pytest.mark.asyncio
async def test_signup_store_failure(mock_uow, hasher):
    mock_uow.users.create.side_effect = PersistenceError("connection lost")

    result = await SignupUseCase(mock_uow, hasher).execute(make_command())

    assert result.is_err()
    assert result.error.code == "PERSISTENCE_ERROR"
    mock_uow.commit.assert_not_called()
