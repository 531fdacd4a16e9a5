"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.config import Settings, get_settings

from . import schemas, service

router = APIRouter()


@router.post("/login", response_model=schemas.TokenResponse)
async def login(
    payload: schemas.LoginRequest,
    settings: Settings = Depends(get_settings),
) -> schemas.TokenResponse:
    """
    {username, password} => {token}. Updates the user's last login.
    """
    return await service.login(payload, settings=settings)


@router.post("/register", response_model=schemas.TokenResponse)
async def register(
    payload: schemas.RegisterRequest,
    settings: Settings = Depends(get_settings),
) -> schemas.TokenResponse:
    """
    Register, log in, and return a token.
    """
    return await service.register_and_login(payload, settings=settings)
