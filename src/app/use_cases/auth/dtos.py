"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain. Wire format is
camelCase; attributes stay snake_case in Python.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for DTOs serialized with camelCase keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResponse(CamelModel):
    """Response for user login use case"""

    user_id: str
    username: str
    access_token: str


class OperationResponse(CamelModel):
    """Generic acknowledgement for logout, forgot-password and reset-password"""

    ok: bool = True
    msg: str


class ProfileResponse(CamelModel):
    """Claims of the current session"""

    user_id: str
    email: str
