from abc import ABC, abstractmethod

from src.app.repositories.user_repository import IUserRepository


class PersistenceError(Exception):
    """Store failure surfaced by repository or commit"""


class DuplicateKeyError(PersistenceError):
    """Unique constraint violated at write time"""


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management

    Implementations raise PersistenceError (never driver exceptions) from
    repository calls and commit().
    """

    # Repository properties (initialized in __aenter__)
    users: IUserRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
