"""
Reset Password With Token Use Case

Consumes the signed reset token of the pending reset challenge.
"""

import logging
import secrets

from libs.result import Error, Result, Return
from src.app.services.auth_settings import AuthSettings
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_signer import TokenSigner
from src.app.services.unit_of_work import PersistenceError, UnitOfWork
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


class ResetPasswordWithTokenUseCase:
    """
    Use case for resetting a password with the emailed reset link token.

    Business Rules:
    - Token verified with the reset secret; embedded expiry enforced
    - Token must carry an email claim for an existing user
    - Token must be the one stored for the pending challenge, so a token
      from a consumed or superseded cycle is rejected
    - Stored reset expiry checked independently of the token's own expiry
    - On success the whole challenge (OTP, token, expiry) is cleared
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

    async def execute(self, token: str, new_password: str) -> Result[bool]:
        """
        Execute reset password with token use case.

        Errors:
            - INVALID_TOKEN: Bad signature, missing email claim, unknown user
              or token not matching the pending challenge
            - TOKEN_EXPIRED: Token expiry or stored reset expiry passed
            - PERSISTENCE_ERROR: Store failure
        """
        invalid = Error("INVALID_TOKEN", "Bad confirmation token")

        verified = self.signer.verify(token, self.settings.reset_token_secret)
        if verified.is_err():
            if verified.error.code == "TOKEN_EXPIRED":
                return Return.err(Error("TOKEN_EXPIRED", "Reset token has expired"))
            return Return.err(invalid)

        email = verified.value.get("email")
        if not isinstance(email, str) or not email:
            return Return.err(invalid)

        async with self.uow:
            try:
                user = await self.uow.users.get_by_email(email)
                if user is None:
                    return Return.err(invalid)

                if not user.reset_token or not secrets.compare_digest(
                    user.reset_token.encode(), token.encode()
                ):
                    return Return.err(invalid)

                challenge = user.reset_challenge
                if challenge is None or challenge.is_expired(utcnow()):
                    return Return.err(Error("TOKEN_EXPIRED", "Reset token has expired"))

                user.password_hash = self.hasher.hash(new_password)
                user.clear_reset()
                await self.uow.users.update(user)
                await self.uow.commit()
            except PersistenceError:
                logger.exception("Failed to persist token password reset")
                return Return.err(
                    Error("PERSISTENCE_ERROR", "Unable to reset password")
                )

            logger.info(f"Password reset with token for user {user.id}")
            return Return.ok(True)
