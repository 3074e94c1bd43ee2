"""
Logout Use Case

Clears the stored session of a user.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import PersistenceError, UnitOfWork
from .dtos import OperationResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logging a user out.

    Business Rules:
    - User must exist
    - Session token, issued-at and expires-at are cleared in one write
    - Idempotent: logging out without an active session still succeeds
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str) -> Result[OperationResponse]:
        async with self.uow:
            try:
                user = await self.uow.users.get_by_email(email)
                if user is None:
                    return Return.err(
                        Error("USER_NOT_FOUND", f"No user found for email: {email}")
                    )

                user.clear_session()
                await self.uow.users.update(user)
                await self.uow.commit()
            except PersistenceError:
                logger.exception("Logout failed to persist")
                return Return.err(Error("PERSISTENCE_ERROR", "Unable to clear session"))

            logger.info(f"Session cleared for user {user.id}")

            return Return.ok(OperationResponse(ok=True, msg="Cleared & Logout session."))
