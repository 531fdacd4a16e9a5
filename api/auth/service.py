"""
Auth business logic.
"""

from __future__ import annotations

import logging

from fastapi.concurrency import run_in_threadpool

from core.config import Settings
from core.errors import AuthError, UnauthorizedError, ValidationError
from users import repository as users_repository
from users import service as users_service

from . import schemas, security

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username/password"


async def register(payload: schemas.RegisterRequest, *, settings: Settings) -> str:
    """
    Hash the password and store a new user. Returns the username.
    """
    try:
        password_hash = await run_in_threadpool(
            security.hash_password,
            payload.password,
            work_factor=settings.bcrypt_work_factor,
        )
    except security.AuthSecurityError as exc:
        raise ValidationError(str(exc)) from exc

    row = await users_repository.create_user(
        username=payload.username,
        password_hash=password_hash,
        first_name=payload.first_name,
        last_name=payload.last_name,
        phone=payload.phone,
    )
    logger.info("user_registered username=%s", row["username"])
    return str(row["username"])


async def authenticate(username: str, password: str) -> bool:
    """
    True if the password matches. Unknown user and wrong password raise the
    same AuthError.
    """
    password_hash = await users_repository.get_password_hash(username)
    if password_hash is not None:
        if await run_in_threadpool(security.verify_password, password, password_hash):
            return True

    logger.info("login_failed username=%s", username)
    raise AuthError(INVALID_CREDENTIALS)


def issue_token(username: str, *, settings: Settings) -> str:
    return security.build_token(username, settings)


async def login(payload: schemas.LoginRequest, *, settings: Settings) -> schemas.TokenResponse:
    await authenticate(payload.username, payload.password)
    await users_service.update_login_timestamp(payload.username)
    logger.info("user_logged_in username=%s", payload.username)
    return schemas.TokenResponse(token=issue_token(payload.username, settings=settings))


async def register_and_login(
    payload: schemas.RegisterRequest,
    *,
    settings: Settings,
) -> schemas.TokenResponse:
    username = await register(payload, settings=settings)
    await users_service.update_login_timestamp(username)
    return schemas.TokenResponse(token=issue_token(username, settings=settings))


def get_user_from_token(token: str, *, settings: Settings) -> dict:
    try:
        username = security.decode_token(token, settings)
    except security.AuthSecurityError as exc:
        raise UnauthorizedError(str(exc)) from exc
    return {"username": username}
