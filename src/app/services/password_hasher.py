from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """One-way adaptive password hash with a fresh salt per call"""

    @abstractmethod
    def hash(self, plain: str) -> str:
        pass

    @abstractmethod
    def compare(self, plain: str, digest: str) -> bool:
        pass
