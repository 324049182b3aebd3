"""Authentication API routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from auth_backend.config import Settings
from auth_backend.database import get_db
from auth_backend.exceptions import AuthError, TokenInvalidError, UnexpectedFailureError
from auth_backend.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    SessionCheckResponse,
    SignupRequest,
    TokenPayload,
    UserPublic,
)
from auth_backend.services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter()


def get_app_settings(request: Request) -> Settings:
    """Dependency returning the settings the application was built with."""
    return request.app.state.settings


def get_session_claims(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> Optional[TokenPayload]:
    """Dependency returning the session claims, or None if absent or invalid."""
    token = request.cookies.get(settings.cookie_name)
    if not token:
        return None
    try:
        return auth_service.decode_session_token(token, settings)
    except TokenInvalidError:
        return None


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        settings.cookie_name,
        token,
        max_age=settings.session_max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    data: SignupRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Register an account and start a session."""
    try:
        user = await auth_service.create_user(db, data, settings)
        token = auth_service.create_session_token(user.id, user.email, settings)
    except AuthError:
        raise
    except Exception as exc:
        logger.exception("Signup error")
        raise UnexpectedFailureError(
            "Server error during registration. Please try again later."
        ) from exc

    _set_session_cookie(response, token, settings)
    return AuthResponse(
        message="Account created successfully!",
        user=UserPublic.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """User login endpoint."""
    try:
        user = await auth_service.authenticate_user(db, data.email, data.password)
        token = auth_service.create_session_token(user.id, user.email, settings)
    except AuthError:
        raise
    except Exception as exc:
        logger.exception("Login error")
        raise UnexpectedFailureError() from exc

    _set_session_cookie(response, token, settings)
    return AuthResponse(
        message="Login successful",
        user=UserPublic.model_validate(user),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    settings: Settings = Depends(get_app_settings),
):
    """Clear the session cookie. The token itself is not checked."""
    response.set_cookie(
        settings.cookie_name,
        "",
        max_age=0,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/auth/check",
    response_model=SessionCheckResponse,
    responses={status.HTTP_401_UNAUTHORIZED: {"model": SessionCheckResponse}},
)
async def check_auth(claims: Optional[TokenPayload] = Depends(get_session_claims)):
    """Report whether the request carries a valid session token."""
    if claims is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"authenticated": False},
        )
    return SessionCheckResponse(authenticated=True, user=claims)
