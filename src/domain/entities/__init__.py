"""
Auth Service Domain Entities
"""

from .credentials import ResetChallenge, SessionGrant
from .user import User

__all__ = [
    "User",
    "SessionGrant",
    "ResetChallenge",
]
