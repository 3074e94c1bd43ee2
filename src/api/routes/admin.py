"""
Admin API Routes - Account Administration Endpoints

Authentication is via Admin API Key, not user session tokens.
"""

from uuid import UUID
from fastapi import APIRouter, Depends, status

from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import RemoveUserUseCase
from src.app.use_cases.auth import OperationResponse
from src.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=OperationResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def remove_user(
    user_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove User

    Hard-deletes a user account.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: USER_NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = RemoveUserUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
