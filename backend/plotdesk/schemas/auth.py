from pydantic import Field
from typing import Optional
from datetime import datetime

from plotdesk.core.constants import (
    EMAIL_MAX_LENGTH,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    UserRole,
)
from plotdesk.schemas.base import CamelModel, EmailFormModel, FormModel


_PASSWORD_MESSAGES = {
    "string_too_long": f"Password must be less than {PASSWORD_MAX_LENGTH} characters.",
    "*": f"Password must be at least {PASSWORD_MIN_LENGTH} characters long.",
}


class User(CamelModel):
    """A dashboard login"""
    id: str
    email: str
    role: UserRole = UserRole.USER


class PasswordRecord(CamelModel):
    """Credential stored by email, not by user id"""
    email: str
    hashed_password: str
    updated_at: datetime


class AuthUser(CamelModel):
    """Identity carried by session tokens - never includes the hash"""
    id: str
    email: str
    role: UserRole


# ============================================
# Forms
# ============================================

class UserForm(EmailFormModel):
    email: str = Field(..., max_length=EMAIL_MAX_LENGTH)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)

    error_messages = {
        "email": {
            "string_too_long": f"Email must be less than {EMAIL_MAX_LENGTH} characters.",
            "*": "Please enter a valid email address.",
        },
        "password": _PASSWORD_MESSAGES,
    }


class NewPasswordForm(FormModel):
    new_password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)

    error_messages = {"new_password": _PASSWORD_MESSAGES}


# ============================================
# Request / response bodies
# ============================================

class LoginRequest(CamelModel):
    email: str
    password: str


class RegisterRequest(CamelModel):
    email: str
    password: str


class ChangePasswordRequest(CamelModel):
    current_password: str
    new_password: str


class AdminPasswordRequest(CamelModel):
    new_password: str


class ResetPasswordRequest(CamelModel):
    email: str
    security_answer: str
    new_password: str


class LoginResponse(CamelModel):
    success: bool = True
    token: str
    token_type: str = "bearer"
    user: AuthUser
    message: Optional[str] = None
