from datetime import timedelta
from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.bcrypt_hasher import BcryptPasswordHasher
from src.adapter.services.jwt_signer import JoseTokenSigner
from src.adapter.services.smtp_mailer import ConsoleMailer, SmtpMailer
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.auth_settings import AuthSettings
from src.app.services.mailer import Mailer
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_signer import TokenSigner

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)


def get_token_signer() -> TokenSigner:
    return JoseTokenSigner()


def get_mailer() -> Mailer:
    if ApplicationConfig.MAIL_BACKEND == "smtp":
        return SmtpMailer(
            host=ApplicationConfig.SMTP_HOST,
            port=ApplicationConfig.SMTP_PORT,
            username=ApplicationConfig.SMTP_USERNAME,
            password=ApplicationConfig.SMTP_PASSWORD,
            from_email=ApplicationConfig.SMTP_FROM_EMAIL,
            from_name=ApplicationConfig.SMTP_FROM_NAME,
            use_ssl=ApplicationConfig.SMTP_USE_SSL,
            timeout=ApplicationConfig.MAIL_TIMEOUT_SECONDS,
        )
    return ConsoleMailer()


def get_auth_settings() -> AuthSettings:
    return AuthSettings(
        jwt_secret=ApplicationConfig.JWT_SECRET,
        session_ttl=timedelta(milliseconds=ApplicationConfig.TOKEN_EXPIRATION_MS),
        reset_token_secret=ApplicationConfig.RESET_TOKEN_SECRET,
        reset_ttl=timedelta(milliseconds=ApplicationConfig.RESET_TOKEN_EXPIRATION_MS),
        reset_password_url=ApplicationConfig.RESET_PASSWORD_URL,
        reset_max_attempts=ApplicationConfig.RESET_MAX_ATTEMPTS,
    )


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """
    Dependency to extract the bearer token from the Authorization header.

    Raises:
        ClientError: 401 if the header is missing or not a bearer token
    """
    if credentials is None or not credentials.credentials:
        raise ClientError(
            Error("INVALID_TOKEN", "Missing bearer token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return credentials.credentials
