"""
Admin Use Cases

System administration operations behind the admin API key.
"""

from .remove_user_use_case import RemoveUserUseCase

__all__ = [
    "RemoveUserUseCase",
]
