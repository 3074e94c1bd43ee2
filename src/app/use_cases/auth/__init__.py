"""
Authentication Use Cases

All authentication-related business logic.
"""

from .signup_use_case import SignupUseCase
from .signup_dto import SignupCommand, SignupResponse, UserInfo
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .reset_password_otp_use_case import ResetPasswordWithOtpUseCase
from .reset_password_token_use_case import ResetPasswordWithTokenUseCase
from .dtos import LoginResponse, OperationResponse, ProfileResponse

__all__ = [
    # Use Cases
    "SignupUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordWithOtpUseCase",
    "ResetPasswordWithTokenUseCase",
    # DTOs - Commands
    "SignupCommand",
    # DTOs - Responses
    "SignupResponse",
    "LoginResponse",
    "OperationResponse",
    "ProfileResponse",
    # DTOs - Nested Models
    "UserInfo",
]
