from fastapi import status
from libs.result import Error

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ApiError(Exception):
    """Use case Error carried to the HTTP layer, rendered as {"error": {...}}"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    def body(self) -> dict:
        return {"error": {"code": self.base_error.code, "message": self.base_error.message}}


class ClientError(ApiError):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(base_error)
        self.status_code = status_code


class ServerError(ApiError):
    """Always 500; the message is replaced so store and mail details stay server side"""

    def body(self) -> dict:
        return {"error": {"code": self.base_error.code, "message": INTERNAL_ERROR_MESSAGE}}
