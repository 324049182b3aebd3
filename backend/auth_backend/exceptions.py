"""Authentication errors surfaced to API clients."""
from typing import Optional
from fastapi import status


class AuthError(Exception):
    """Base error carrying an HTTP status and a client-safe message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Server error. Please try again later."

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class DuplicateAccountError(AuthError):
    """An account with the given email already exists."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "An account with this email already exists"


class InvalidCredentialsError(AuthError):
    """Unknown email or wrong password; the two are deliberately identical."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid email or password"


class TokenInvalidError(AuthError):
    """Session token is missing claims, malformed, tampered with or expired."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid or expired token"


class UnexpectedFailureError(AuthError):
    """Store or infrastructure fault; details stay in the server log."""
