from datetime import timedelta

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.auth_settings import AuthSettings
from src.depends import (
    get_auth_settings,
    get_mailer,
    get_password_hasher,
    get_unit_of_work,
)
from tests.fixtures.recording_mailer import RecordingMailer
from tests.fixtures.users import fast_hasher


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def mailer():
    return RecordingMailer()


@pytest_asyncio.fixture
def auth_settings():
    return AuthSettings(
        jwt_secret="integration-session-secret",
        session_ttl=timedelta(minutes=10),
        reset_token_secret="integration-reset-secret",
        reset_ttl=timedelta(minutes=10),
        reset_password_url="https://app.test/reset",
        reset_max_attempts=3,
    )


@pytest_asyncio.fixture
async def client(db_session, mailer, auth_settings):
    from config import ApplicationConfig
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_password_hasher] = lambda: fast_hasher
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_auth_settings] = lambda: auth_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
