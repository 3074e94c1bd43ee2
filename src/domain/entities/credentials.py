"""
Credential Value Objects

Session and reset state are written to the User as whole groups, never
field by field.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class SessionGrant(BaseModel):
    """
    An issued login session.

    Business Rules:
    - token, issued_at and expires_at are stored together or not at all
    - expires_at = issued_at + TOKEN_EXPIRATION_MS
    """

    model_config = ConfigDict(frozen=True)

    token: str
    issued_at: datetime
    expires_at: datetime


class ResetChallenge(BaseModel):
    """
    An active password reset cycle.

    Business Rules:
    - OTP and signed token are issued together and share one expiry
    - Consuming either one clears the whole challenge
    """

    model_config = ConfigDict(frozen=True)

    otp: str
    token: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
