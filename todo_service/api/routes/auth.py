from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from todo_service.api.error import ClientError, ServerError
from todo_service.api.utils.jwt import ResetTokenCodec
from todo_service.app.services.email_sender import IEmailSender
from todo_service.app.services.unit_of_work import UnitOfWork
from todo_service.app.use_cases.auth import (
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    LoginUseCase,
    LoginResponse,
    RequestPasswordResetUseCase,
    RequestPasswordResetResponse,
    ConfirmPasswordResetUseCase,
    ConfirmPasswordResetResponse,
)
from todo_service.depends import (
    get_config,
    get_email_sender,
    get_reset_token_codec,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Fields are optional so that missing values are reported by the use
    case with the same error body as every other auth failure.
    """

    name: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


@router.post(
    "/register", status_code=status.HTTP_200_OK, response_model=RegisterResponse
)
async def register(
    request: RegisterRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    User Registration

    Raises:
        - 400 Bad Request: Missing name, email or password, or password over 72 bytes
        - 409 Conflict: Email already exists
    """
    command = RegisterCommand(
        name=request.name, email=request.email, password=request.password
    )

    use_case = RegisterUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error)
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(request: LoginRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    User Login

    Raises:
        - 400 Bad Request: Missing email or password
        - 401 Unauthorized: Invalid credentials
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error)
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: Optional[str] = Field(None, description="Email address of the account")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    codec: ResetTokenCodec = Depends(get_reset_token_codec),
    email_sender: IEmailSender = Depends(get_email_sender),
    config=Depends(get_config),
):
    """
    Request Password Reset

    Sends a reset link when the email belongs to an account. The response
    is identical whether or not the account exists.

    Raises:
        - 400 Bad Request: Missing or malformed email
        - 500 Internal Server Error: Reset email could not be delivered
    """
    use_case = RequestPasswordResetUseCase(
        uow,
        codec,
        email_sender,
        base_url=config.APP_BASE_URL,
        ttl=timedelta(minutes=config.RESET_TOKEN_TTL_MINUTES),
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error)
        if error.code == "EMAIL_DELIVERY_FAILED":
            raise ServerError(error, expose_message=True)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    token: Optional[str] = Field(None, description="Reset token from the emailed link")
    password: Optional[str] = Field(None, description="New password (min 6 chars)")


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    codec: ResetTokenCodec = Depends(get_reset_token_codec),
):
    """
    Confirm Password Reset

    Consumes the reset token and sets the new password. A token works once.

    Raises:
        - 400 Bad Request: Missing token, short password, or invalid/expired token
        - 404 Not Found: Account no longer exists
        - 500 Internal Server Error: Password could not be stored
    """
    use_case = ConfirmPasswordResetUseCase(uow, codec)
    result = await use_case.execute(request.token, request.password)

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_ERROR", "INVALID_TOKEN"):
            raise ClientError(error)
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        if error.code == "PASSWORD_UPDATE_FAILED":
            raise ServerError(error, expose_message=True)
        raise ServerError(error)

    return result.value
