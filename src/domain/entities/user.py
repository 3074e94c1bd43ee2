"""
User Entity

A registered account with its session and password reset state.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow
from .credentials import ResetChallenge, SessionGrant


class User(SQLModel, table=True):
    """
    User entity - identity, profile, session and reset state.

    Business Rules:
    - Email must be unique across all users (case-sensitive as stored)
    - Password stored as bcrypt hash, plaintext never persisted
    - Session fields change only through grant_session/clear_session
    - Reset fields change only through open_reset/clear_reset
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    # Profile
    name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    telephone: str = Field(max_length=15)
    date_of_birth: date
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    # Session (login/logout)
    session_token: Optional[str] = Field(default=None, max_length=512)
    session_issued_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    session_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Password reset (forgot-password / reset-password)
    reset_token: Optional[str] = Field(default=None, max_length=512)
    reset_otp: Optional[str] = Field(default=None, max_length=6)
    reset_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    reset_attempts: int = Field(default=0)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    @property
    def username(self) -> str:
        return self.email.split("@")[0]

    @property
    def session(self) -> Optional[SessionGrant]:
        if self.session_token is None:
            return None
        return SessionGrant(
            token=self.session_token,
            issued_at=self.session_issued_at,
            expires_at=self.session_expires_at,
        )

    def grant_session(self, grant: SessionGrant) -> None:
        self.session_token = grant.token
        self.session_issued_at = grant.issued_at
        self.session_expires_at = grant.expires_at

    def clear_session(self) -> None:
        self.session_token = None
        self.session_issued_at = None
        self.session_expires_at = None

    @property
    def reset_challenge(self) -> Optional[ResetChallenge]:
        if self.reset_expires_at is None:
            return None
        return ResetChallenge(
            otp=self.reset_otp or "",
            token=self.reset_token or "",
            expires_at=self.reset_expires_at,
        )

    def open_reset(self, challenge: ResetChallenge) -> None:
        self.reset_otp = challenge.otp
        self.reset_token = challenge.token
        self.reset_expires_at = challenge.expires_at
        self.reset_attempts = 0

    def clear_reset(self) -> None:
        self.reset_otp = None
        self.reset_token = None
        self.reset_expires_at = None
        self.reset_attempts = 0
