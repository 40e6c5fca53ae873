"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
"""

from typing import Optional

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - registration intent as submitted.

    Fields are optional here; presence is a business rule checked by the
    use case so the error message matches the other auth endpoints.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Public user information (never includes the password hash)"""

    id: str
    name: str
    email: str


class RegisterResponse(BaseModel):
    """Response for register use case"""

    message: str
    user: UserInfo


class LoginResponse(BaseModel):
    """Response for login use case"""

    message: str
    user: UserInfo


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class ConfirmPasswordResetResponse(BaseModel):
    """Response for confirm password reset use case"""

    status: str
    message: str
