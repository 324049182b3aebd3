"""Authentication service."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
import anyio
import jwt
import bcrypt
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from auth_backend.config import Settings
from auth_backend.exceptions import (
    DuplicateAccountError,
    InvalidCredentialsError,
    TokenInvalidError,
)
from auth_backend.models.user import User, normalize_email
from auth_backend.schemas.auth import SignupRequest, TokenPayload

logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes; longer input is cut, not rejected
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode('utf-8')[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(
            _password_bytes(plain_password),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        # Malformed stored hash
        return False


def create_session_token(
    user_id: int,
    email: str,
    settings: Settings,
    issued_at: Optional[datetime] = None,
) -> str:
    """Create a signed session token that expires ``jwt_expire_hours`` after issue."""
    issued_at = issued_at or datetime.now(timezone.utc)
    payload = {
        "userId": str(user_id),
        "email": email,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=settings.jwt_expire_hours),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str, settings: Settings) -> TokenPayload:
    """
    Verify signature and expiry of a session token and return its claims.

    Only the token is consulted; the store is not.

    Raises:
        TokenInvalidError: bad signature, expired, malformed or missing claims.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["userId", "email", "exp", "iat"]},
        )
        return TokenPayload(**payload)
    except (jwt.PyJWTError, ValidationError) as exc:
        raise TokenInvalidError() from exc


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    """Get a user by (normalized) email."""
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, data: SignupRequest, settings: Settings) -> User:
    """
    Register a new account.

    The existence check is only a fast path; two concurrent signups can both
    pass it, and the unique index on ``users.email`` rejects the second insert.

    Raises:
        DuplicateAccountError: the email is already registered.
    """
    if await get_user_by_email(db, data.email) is not None:
        raise DuplicateAccountError()

    password_hash = await anyio.to_thread.run_sync(
        hash_password, data.password, settings.bcrypt_rounds
    )
    user = User(
        name=data.name,
        email=data.email,
        password_hash=password_hash,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        if await get_user_by_email(db, data.email) is not None:
            raise DuplicateAccountError() from exc
        raise
    await db.refresh(user)

    logger.info("User created: id=%s", user.id)
    return user


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User:
    """
    Authenticate a user by email and password.

    Raises:
        InvalidCredentialsError: unknown email or wrong password (same error).
    """
    user = await get_user_by_email(db, email)
    if user is None:
        logger.info("Login failed for %s: unknown email", email)
        raise InvalidCredentialsError()

    valid = await anyio.to_thread.run_sync(verify_password, password, user.password_hash)
    if not valid:
        logger.info("Login failed for %s: wrong password", email)
        raise InvalidCredentialsError()

    return user
