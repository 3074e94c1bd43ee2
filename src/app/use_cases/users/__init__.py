"""
User Use Cases
"""

from .load_profile_use_case import LoadProfileUseCase

__all__ = [
    "LoadProfileUseCase",
]
