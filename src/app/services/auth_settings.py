from datetime import timedelta

from pydantic import BaseModel


class AuthSettings(BaseModel):
    """Secrets and lifetimes the auth use cases depend on"""

    jwt_secret: str
    session_ttl: timedelta = timedelta(minutes=10)
    reset_token_secret: str
    reset_ttl: timedelta = timedelta(minutes=10)
    reset_password_url: str = ""
    reset_max_attempts: int = 5  # 0 disables the OTP attempt limit
