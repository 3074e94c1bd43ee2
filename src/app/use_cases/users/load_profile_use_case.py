"""
Load Profile Use Case

Resolves a bearer session token to the claims of its live session.
"""

import secrets
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.auth_settings import AuthSettings
from src.app.services.token_signer import TokenSigner
from src.app.services.unit_of_work import PersistenceError, UnitOfWork
from src.app.use_cases.auth.dtos import ProfileResponse
from src.domain.base import utcnow


class LoadProfileUseCase:
    """
    Use case for the authenticated profile endpoint.

    Business Rules:
    - Token signature and embedded expiry must verify with the session secret
    - Token must still be the user's stored session (logout revokes it)
    - Stored session expiry must be in the future
    """

    def __init__(self, uow: UnitOfWork, signer: TokenSigner, settings: AuthSettings):
        self.uow = uow
        self.signer = signer
        self.settings = settings

    async def execute(self, token: str) -> Result[ProfileResponse]:
        invalid = Error("INVALID_TOKEN", "Invalid or expired token")

        verified = self.signer.verify(token, self.settings.jwt_secret)
        if verified.is_err():
            return Return.err(verified.error)

        claims = verified.value
        try:
            user_id = UUID(str(claims.get("sub")))
        except ValueError:
            return Return.err(invalid)

        async with self.uow:
            try:
                user = await self.uow.users.get_by_id(user_id)
            except PersistenceError:
                return Return.err(Error("PERSISTENCE_ERROR", "Unable to load session"))

            session = user.session if user else None
            if session is None or not secrets.compare_digest(
                session.token.encode(), token.encode()
            ):
                return Return.err(invalid)

            if session.expires_at <= utcnow():
                return Return.err(Error("TOKEN_EXPIRED", "Session has expired"))

            return Return.ok(ProfileResponse(user_id=str(user.id), email=user.email))
