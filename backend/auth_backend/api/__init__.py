"""API routes."""
from fastapi import APIRouter
from auth_backend.api import auth

api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
