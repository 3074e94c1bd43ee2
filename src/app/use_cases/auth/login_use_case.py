"""
Login Use Case

Validates credentials and issues a signed session token.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.auth_settings import AuthSettings
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_signer import TokenSigner
from src.app.services.unit_of_work import PersistenceError, UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import SessionGrant, User
from .dtos import LoginResponse

logger = logging.getLogger(__name__)

# Valid bcrypt hash of an unguessable string; compared against when the email
# is unknown so both failure branches cost one hash check
_DUMMY_HASH = "$2b$12$C6UzMDM.H6dfI/f/IKcEeO5pEyNzP4bQq4bWm7o8y8Gq9J3D0kYy."


class LoginUseCase:
    """
    Use case for user login and session issuance.

    Business Rules:
    - Unknown email and wrong password produce the identical error
    - A hash comparison runs on both branches (no timing oracle)
    - Session token binds user id and email, expires after session_ttl
    - Token, issued-at and expires-at are persisted together
    - A failed save leaves no session behind (token is discarded)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: PasswordHasher,
        signer: TokenSigner,
        settings: AuthSettings,
    ):
        self.uow = uow
        self.hasher = hasher
        self.signer = signer
        self.settings = settings

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse, or Error(INVALID_CREDENTIALS /
            SESSION_ISSUANCE_ERROR)
        """
        async with self.uow:
            credentials = await self.validate_credentials(email, password)
            if credentials.is_err():
                return Return.err(credentials.error)

            return await self.issue_session(credentials.value)

    async def validate_credentials(self, email: str, password: str) -> Result[User]:
        invalid = Error("INVALID_CREDENTIALS", "Invalid email or password")

        try:
            user = await self.uow.users.get_by_email(email)
        except PersistenceError:
            logger.exception("Credential lookup failed")
            return Return.err(Error("PERSISTENCE_ERROR", "Unable to validate credentials"))

        if user is None:
            self.hasher.compare(password, _DUMMY_HASH)
            return Return.err(invalid)

        if not self.hasher.compare(password, user.password_hash):
            return Return.err(invalid)

        return Return.ok(user)

    async def issue_session(self, user: User) -> Result[LoginResponse]:
        issued_at = utcnow()
        access_token = self.signer.sign(
            {"sub": str(user.id), "email": user.email},
            self.settings.session_ttl,
            self.settings.jwt_secret,
        )
        user.grant_session(
            SessionGrant(
                token=access_token,
                issued_at=issued_at,
                expires_at=issued_at + self.settings.session_ttl,
            )
        )

        try:
            await self.uow.users.update(user)
            await self.uow.commit()
        except PersistenceError:
            logger.exception(f"Failed to persist session for user {user.id}")
            await self.uow.rollback()
            return Return.err(
                Error("SESSION_ISSUANCE_ERROR", "Error processing token")
            )

        logger.info(f"Session issued for user {user.id}")

        return Return.ok(
            LoginResponse(
                user_id=str(user.id),
                username=user.username,
                access_token=access_token,
            )
        )
