"""User model."""
import re
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import validates
from auth_backend.database import Base

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 255


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    """Trim and lowercase an email so lookups and the unique index agree."""
    return email.strip().lower()


class User(Base):
    """User account with a bcrypt password hash."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    email = Column(String(EMAIL_MAX_LENGTH), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)
    # Never written by the auth flow
    last_login = Column(DateTime, nullable=True)

    @validates("name")
    def _validate_name(self, key, value):
        value = (value or "").strip()
        if not NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH:
            raise ValueError(
                f"name must be {NAME_MIN_LENGTH}-{NAME_MAX_LENGTH} characters"
            )
        return value

    @validates("email")
    def _validate_email(self, key, value):
        value = normalize_email(value or "")
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Please enter a valid email address")
        return value

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
