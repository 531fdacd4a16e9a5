"""
Auth security helpers: bcrypt password hashing and JWT identity tokens.
"""

from __future__ import annotations

import time

import bcrypt
import jwt

from core.config import Settings


class AuthSecurityError(RuntimeError):
    pass


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str, *, work_factor: int) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    if len(password) > 72:
        # bcrypt only reads the first 72 bytes.
        raise AuthSecurityError("Password is longer than 72 bytes.")
    return bcrypt.hashpw(password, bcrypt.gensalt(rounds=work_factor)).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_token(username: str, settings: Settings) -> str:
    issued_at = now_epoch_s()
    payload: dict = {"username": username, "iat": issued_at}
    if settings.token_expire_minutes > 0:
        payload["exp"] = issued_at + (settings.token_expire_minutes * 60)
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> str:
    """
    Verify `token` and return its `username` claim.
    """
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Token is empty.")

    try:
        payload = jwt.decode(raw, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid token.") from exc

    username = str(payload.get("username") or "").strip()
    if not username:
        raise AuthSecurityError("Token has no username claim.")
    return username
