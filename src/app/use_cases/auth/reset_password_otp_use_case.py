"""
Reset Password With OTP Use Case

Consumes the 6-digit OTP of the pending reset challenge.
"""

import logging
import secrets

from libs.result import Error, Result, Return
from src.app.services.auth_settings import AuthSettings
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import PersistenceError, UnitOfWork
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


class ResetPasswordWithOtpUseCase:
    """
    Use case for resetting a password with the emailed OTP.

    Business Rules (checked in order, each a hard gate):
    - User must exist
    - Attempt limit not reached (reset_max_attempts, 0 = unlimited)
    - Stored OTP present and equal to the submitted one
    - Reset expiry present and strictly in the future
    - On success the whole challenge (OTP, token, expiry) is cleared
    - A wrong OTP only increments the attempt counter; the challenge stays
    - No session is created
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: PasswordHasher,
        settings: AuthSettings,
    ):
        self.uow = uow
        self.hasher = hasher
        self.settings = settings

    async def execute(self, otp: str, email: str, new_password: str) -> Result[bool]:
        """
        Execute reset password with OTP use case.

        Errors:
            - USER_NOT_FOUND: No account for the email
            - TOO_MANY_ATTEMPTS: Attempt limit reached for this challenge
            - INVALID_OTP: No pending OTP or mismatch
            - OTP_EXPIRED: Challenge expired
            - PERSISTENCE_ERROR: Store failure
        """
        async with self.uow:
            try:
                user = await self.uow.users.get_by_email(email)
                if user is None:
                    return Return.err(
                        Error("USER_NOT_FOUND", f"No user found for email: {email}")
                    )

                max_attempts = self.settings.reset_max_attempts
                if max_attempts > 0 and user.reset_attempts >= max_attempts:
                    return Return.err(
                        Error(
                            "TOO_MANY_ATTEMPTS",
                            "Too many invalid attempts, request a new code",
                        )
                    )

                if not user.reset_otp or not secrets.compare_digest(
                    user.reset_otp.encode(), otp.encode()
                ):
                    if user.reset_otp:
                        user.reset_attempts += 1
                        await self.uow.users.update(user)
                        await self.uow.commit()
                    return Return.err(Error("INVALID_OTP", "Invalid OTP"))

                challenge = user.reset_challenge
                if challenge is None or challenge.is_expired(utcnow()):
                    return Return.err(Error("OTP_EXPIRED", "OTP has expired"))

                user.password_hash = self.hasher.hash(new_password)
                user.clear_reset()
                await self.uow.users.update(user)
                await self.uow.commit()
            except PersistenceError:
                logger.exception("Failed to persist OTP password reset")
                return Return.err(
                    Error("PERSISTENCE_ERROR", "Unable to reset password")
                )

            logger.info(f"Password reset with OTP for user {user.id}")
            return Return.ok(True)
