from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """
    Credential store port.

    Writes are flushed but not committed; the surrounding UnitOfWork decides.
    Store failures surface as PersistenceError, a unique email violation as
    DuplicateKeyError.
    """

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Exact (case-sensitive) match on the stored email"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a new account; returns it with server defaults loaded"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Persist changed session/reset/password fields of an existing account"""
        pass

    @abstractmethod
    async def delete(self, user: User) -> None:
        pass
