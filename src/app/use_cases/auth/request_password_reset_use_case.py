"""
Request Password Reset Use Case

Issues an OTP and a signed reset token and mails both to the user.
"""

import logging
import secrets

from libs.result import Error, Result, Return
from src.app.services.auth_settings import AuthSettings
from src.app.services.mailer import Mailer
from src.app.services.token_signer import TokenSigner
from src.app.services.unit_of_work import PersistenceError, UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import ResetChallenge
from . import reset_email

logger = logging.getLogger(__name__)


def generate_otp() -> str:
    """Uniform 6-digit code, zero padded (000000-999999)"""
    return f"{secrets.randbelow(1_000_000):06d}"


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - OTP and token are issued together and share a single expiry
    - Token payload carries only the email, signed with the reset secret
    - A new request replaces any pending challenge and its attempt count
    - Reset state is committed only after the email has been handed to
      the mailer; a delivery failure rolls it back
    - The reset row is flushed before the send, so its write transaction
      stays open for up to the mailer timeout (on SQLite this blocks other
      writers for that long)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        signer: TokenSigner,
        mailer: Mailer,
        settings: AuthSettings,
    ):
        self.uow = uow
        self.signer = signer
        self.mailer = mailer
        self.settings = settings

    async def execute(self, email: str) -> Result[None]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with None, or Error(USER_NOT_FOUND / MAIL_DELIVERY_ERROR /
            PERSISTENCE_ERROR)
        """
        async with self.uow:
            try:
                user = await self.uow.users.get_by_email(email)
                if user is None:
                    return Return.err(
                        Error("USER_NOT_FOUND", f"No user found for email: {email}")
                    )

                otp = generate_otp()
                token = self.signer.sign(
                    {"email": user.email},
                    self.settings.reset_ttl,
                    self.settings.reset_token_secret,
                )
                user.open_reset(
                    ResetChallenge(
                        otp=otp,
                        token=token,
                        expires_at=utcnow() + self.settings.reset_ttl,
                    )
                )
                await self.uow.users.update(user)

                sent = await self._send_reset_email(user.email, otp, token)
                if sent.is_err():
                    return Return.err(sent.error)

                await self.uow.commit()
            except PersistenceError:
                logger.exception("Failed to persist reset challenge")
                return Return.err(
                    Error("PERSISTENCE_ERROR", "Unable to start password reset")
                )

            logger.info(f"Password reset issued for user {user.id}")
            return Return.ok(None)

    async def _send_reset_email(self, to: str, otp: str, token: str) -> Result[None]:
        valid_minutes = int(self.settings.reset_ttl.total_seconds() // 60)
        reset_url = reset_email.build_reset_url(self.settings.reset_password_url, token)
        return await self.mailer.send(
            to,
            reset_email.SUBJECT,
            reset_email.render_text(reset_url, otp, valid_minutes),
            reset_email.render_html(reset_url, otp, valid_minutes),
        )
