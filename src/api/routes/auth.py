from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import EmailStr, Field

from src.api.error import ClientError, ServerError
from src.api.validation import (
    LOGIN_RULES,
    RESET_PASSWORD_RULES,
    SIGNUP_RULES,
    parse_date_of_birth,
    run_rules,
)
from src.app.services.auth_settings import AuthSettings
from src.app.services.mailer import Mailer
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_signer import TokenSigner
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginResponse,
    LoginUseCase,
    LogoutUseCase,
    OperationResponse,
    ProfileResponse,
    RequestPasswordResetUseCase,
    ResetPasswordWithOtpUseCase,
    ResetPasswordWithTokenUseCase,
    SignupCommand,
    SignupResponse,
    SignupUseCase,
)
from src.app.use_cases.auth.dtos import CamelModel
from src.app.use_cases.users import LoadProfileUseCase
from src.depends import (
    get_auth_settings,
    get_bearer_token,
    get_mailer,
    get_password_hasher,
    get_token_signer,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _validate(request: CamelModel, rules, **extra) -> None:
    """Run the field rules; reject with 400 VALIDATION_ERROR before the core runs"""
    checked = run_rules({**request.model_dump(), **extra}, rules)
    if checked.is_err():
        raise ClientError(checked.error, status_code=status.HTTP_400_BAD_REQUEST)


class SignupRequest(CamelModel):
    """
    Signup HTTP request payload

    Field-level rules live in SIGNUP_RULES; this model only fixes the shape.
    """

    name: str
    last_name: str
    telephone: str
    date_of_birth: str = Field(..., description="dd/MM/yyyy, yyyy/MM/dd or yyyy-MM-dd")
    email: EmailStr
    password: str
    confirm_password: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@router.post(
    "/signup", status_code=status.HTTP_201_CREATED, response_model=SignupResponse
)
async def signup(
    request: SignupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """
    User Signup

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 409 Conflict: DUPLICATE_EMAIL
        - 500 Internal Server Error: PERSISTENCE_ERROR
    """
    _validate(request, SIGNUP_RULES)

    # Map HTTP request to Command (confirmation is not carried further)
    command = SignupCommand(
        name=request.name,
        last_name=request.last_name,
        telephone=request.telephone,
        date_of_birth=parse_date_of_birth(request.date_of_birth),
        email=request.email,
        password=request.password,
        latitude=request.latitude,
        longitude=request.longitude,
    )

    use_case = SignupUseCase(uow, hasher)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "DUPLICATE_EMAIL":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(CamelModel):
    """Login HTTP request payload"""

    email: EmailStr
    password: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    signer: TokenSigner = Depends(get_token_signer),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    User Login

    Raises:
        - 401 Unauthorized: INVALID_CREDENTIALS (same for unknown email and wrong password)
        - 500 Internal Server Error: SESSION_ISSUANCE_ERROR
    """
    _validate(request, LOGIN_RULES)

    use_case = LoginUseCase(uow, hasher, signer, settings)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


class EmailRequest(CamelModel):
    """Payload carrying only an email (logout, forgot-password)"""

    email: EmailStr


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=OperationResponse)
async def logout(request: EmailRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    User Logout

    Clears the stored session. Idempotent.

    Raises:
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/forgot-password", status_code=status.HTTP_200_OK, response_model=OperationResponse
)
async def forgot_password(
    request: EmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    signer: TokenSigner = Depends(get_token_signer),
    mailer: Mailer = Depends(get_mailer),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Forgot Password

    Emails a 6-digit OTP and a reset link, both valid until the same expiry.

    Raises:
        - 400 Bad Request: USER_NOT_FOUND
        - 500 Internal Server Error: MAIL_DELIVERY_ERROR, PERSISTENCE_ERROR
    """
    use_case = RequestPasswordResetUseCase(uow, signer, mailer, settings)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return OperationResponse(ok=True, msg=f"Email sent to {request.email}")


class ResetPasswordRequest(CamelModel):
    """Reset password HTTP request payload (OTP + email, or token)"""

    email: Optional[EmailStr] = None
    otp: Optional[str] = None
    token: Optional[str] = None
    new_password: str


RESET_ERROR_STATUS = {
    "INVALID_OTP": status.HTTP_400_BAD_REQUEST,
    "INVALID_TOKEN": status.HTTP_400_BAD_REQUEST,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "OTP_EXPIRED": status.HTTP_410_GONE,
    "TOKEN_EXPIRED": status.HTTP_410_GONE,
    "TOO_MANY_ATTEMPTS": status.HTTP_429_TOO_MANY_REQUESTS,
}


@router.post(
    "/reset-password", status_code=status.HTTP_200_OK, response_model=OperationResponse
)
async def reset_password(
    request: ResetPasswordRequest,
    method: Optional[str] = Query(None, description='"otp" or "token"'),
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    signer: TokenSigner = Depends(get_token_signer),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Reset Password

    ?method=otp consumes the OTP for the given email; ?method=token consumes
    the signed link token. Either one invalidates the other.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR, INVALID_OTP, INVALID_TOKEN
        - 404 Not Found: USER_NOT_FOUND
        - 410 Gone: OTP_EXPIRED, TOKEN_EXPIRED
        - 429 Too Many Requests: TOO_MANY_ATTEMPTS
    """
    _validate(request, RESET_PASSWORD_RULES, method=method)

    if method == "otp":
        use_case = ResetPasswordWithOtpUseCase(uow, hasher, settings)
        result = await use_case.execute(request.otp, request.email, request.new_password)
    else:
        use_case = ResetPasswordWithTokenUseCase(uow, hasher, signer, settings)
        result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code in RESET_ERROR_STATUS:
            raise ClientError(error, status_code=RESET_ERROR_STATUS[error.code])
        raise ServerError(error)

    return OperationResponse(ok=True, msg="Password successfully reset.")


@router.post("/profile", status_code=status.HTTP_200_OK, response_model=ProfileResponse)
async def profile(
    token: str = Depends(get_bearer_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    signer: TokenSigner = Depends(get_token_signer),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Current Session Profile

    Returns the claims of the bearer session token.

    Raises:
        - 401 Unauthorized: INVALID_TOKEN, TOKEN_EXPIRED
    """
    use_case = LoadProfileUseCase(uow, signer, settings)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_TOKEN", "TOKEN_EXPIRED"):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value
