"""
Remove User Use Case

Administrative hard delete of a user account.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import PersistenceError, UnitOfWork
from src.app.use_cases.auth.dtos import OperationResponse

logger = logging.getLogger(__name__)


class RemoveUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[OperationResponse]:
        async with self.uow:
            try:
                user = await self.uow.users.get_by_id(user_id)
                if user is None:
                    return Return.err(Error("USER_NOT_FOUND", "User not found"))

                await self.uow.users.delete(user)
                await self.uow.commit()
            except PersistenceError:
                logger.exception(f"Failed to remove user {user_id}")
                return Return.err(Error("PERSISTENCE_ERROR", "Unable to remove user"))

            logger.info(f"User removed: {user_id}")
            return Return.ok(OperationResponse(ok=True, msg=f"User {user_id} removed."))
