"""Authentication schemas."""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from auth_backend.models.user import (
    EMAIL_MAX_LENGTH,
    EMAIL_PATTERN,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    normalize_email,
)

PASSWORD_MIN_LENGTH = 8


def _check_email(value: str) -> str:
    value = normalize_email(value)
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Please enter a valid email address")
    return value


class SignupRequest(BaseModel):
    """Signup request schema."""
    name: str
    email: str = Field(max_length=EMAIL_MAX_LENGTH)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not NAME_MIN_LENGTH <= len(v) <= NAME_MAX_LENGTH:
            raise ValueError(
                f"name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
            )
        return v

    @field_validator("email")
    @classmethod
    def clean_email(cls, v: str) -> str:
        return _check_email(v)


class LoginRequest(BaseModel):
    """Login request schema."""
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def clean_email(cls, v: str) -> str:
        # No pattern check: a malformed email is just another unknown account
        return normalize_email(v)


class UserPublic(BaseModel):
    """Public user projection; never includes the password hash."""
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Signup and login response."""
    message: str
    user: UserPublic


class MessageResponse(BaseModel):
    """Plain message response."""
    message: str


class TokenPayload(BaseModel):
    """JWT session token payload."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    email: str
    iat: int
    exp: int


class SessionCheckResponse(BaseModel):
    """Result of checking the session cookie."""
    authenticated: bool
    user: Optional[TokenPayload] = None
