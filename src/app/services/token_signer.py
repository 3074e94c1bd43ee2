from abc import ABC, abstractmethod
from datetime import timedelta

from libs.result import Result


class TokenSigner(ABC):
    """
    Symmetric-key signed tokens with an expiry claim.

    verify() returns the decoded claims, or an Error with code
    TOKEN_EXPIRED (signature fine, expiry passed) or INVALID_TOKEN.
    """

    @abstractmethod
    def sign(self, payload: dict, expires_in: timedelta, secret: str) -> str:
        pass

    @abstractmethod
    def verify(self, token: str, secret: str) -> Result[dict]:
        pass
