"""
Signup Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- SignupCommand: Input to use case (validated business intent)
- SignupResponse: Output from use case (structured result)
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel

from .dtos import CamelModel


class SignupCommand(BaseModel):
    """
    Signup command - represents validated signup intent

    Created by API layer after the validation pass succeeds. The password
    confirmation has already been checked and is not carried here.
    """

    name: str
    last_name: str
    telephone: str
    date_of_birth: date
    email: str
    password: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class UserInfo(CamelModel):
    """User information in signup response"""

    id: str
    name: str
    last_name: str
    email: str


class SignupResponse(CamelModel):
    """Signup response - code "01" marks a created account"""

    code: str = "01"
    user_info: UserInfo
