"""Pydantic schemas for request/response models."""
from auth_backend.schemas.auth import (
    SignupRequest,
    LoginRequest,
    UserPublic,
    AuthResponse,
    MessageResponse,
    TokenPayload,
    SessionCheckResponse,
)

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "UserPublic",
    "AuthResponse",
    "MessageResponse",
    "TokenPayload",
    "SessionCheckResponse",
]
