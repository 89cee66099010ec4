# =============================================================================
# core/models/auth.py - Login Schemas
# =============================================================================
# Credentials submitted on the login form. They are checked for shape here
# and verified by Supabase Auth; nothing is persisted.
# =============================================================================

from typing import ClassVar

from pydantic import BaseModel, EmailStr, Field, field_validator


class LoginCredentials(BaseModel):
    """Email/password pair from the login form."""

    error_messages: ClassVar[dict[str, str]] = {
        "email": "Please enter a valid email address.",
        "password": "Password must be between 6 and 255 characters.",
    }

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=255)

    @field_validator("email")
    @classmethod
    def email_length(cls, value: str) -> str:
        if len(value) > 255:
            raise ValueError("email must be at most 255 characters")
        return value


class AuthSession(BaseModel):
    """Tokens handed back by the credentials provider after sign-in."""

    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    user_id: str | None = None
    email: str | None = None


class LoginResult(BaseModel):
    """Outcome of a login attempt: a session on success, a message otherwise."""

    session: AuthSession | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.session is not None
