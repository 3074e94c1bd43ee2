from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.adapter.services.jwt_signer import JoseTokenSigner
from src.app.services.auth_settings import AuthSettings
from tests.fixtures.recording_mailer import RecordingMailer
from tests.fixtures.users import fast_hasher


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.delete = AsyncMock()
    return uow


@pytest.fixture
def settings():
    return AuthSettings(
        jwt_secret="unit-session-secret",
        session_ttl=timedelta(minutes=10),
        reset_token_secret="unit-reset-secret",
        reset_ttl=timedelta(minutes=10),
        reset_password_url="https://app.test/reset",
        reset_max_attempts=3,
    )


@pytest.fixture
def hasher():
    return fast_hasher


@pytest.fixture
def signer():
    return JoseTokenSigner()


@pytest.fixture
def mailer():
    return RecordingMailer()
