"""SQLAlchemy models."""
from auth_backend.models.user import User

__all__ = ["User"]
