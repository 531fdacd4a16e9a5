"""
Process-wide settings loaded from the environment.

Settings are read once (see `get_settings`) and passed explicitly to the code
that needs them, so tests can build their own `Settings` instead of patching
environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

DEFAULT_SECRET_KEY = "dev-change-this-secret"
DEFAULT_JWT_ALG = "HS256"
DEFAULT_BCRYPT_WORK_FACTOR = 12
DEFAULT_TOKEN_EXPIRE_MIN = 24 * 60
DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    database_url: str = ""
    secret_key: str = DEFAULT_SECRET_KEY
    jwt_algorithm: str = DEFAULT_JWT_ALG
    bcrypt_work_factor: int = DEFAULT_BCRYPT_WORK_FACTOR
    # 0 means tokens are issued without an `exp` claim.
    token_expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MIN
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)
    log_level: str = "INFO"


def load_settings() -> Settings:
    work_factor = _env_int("BCRYPT_WORK_FACTOR", DEFAULT_BCRYPT_WORK_FACTOR)
    # bcrypt only accepts 4..31 rounds.
    work_factor = max(4, min(work_factor, 31))

    return Settings(
        database_url=os.environ.get("DATABASE_URL", "").strip(),
        secret_key=_env_str("SECRET_KEY", DEFAULT_SECRET_KEY),
        jwt_algorithm=_env_str("JWT_ALG", DEFAULT_JWT_ALG),
        bcrypt_work_factor=work_factor,
        token_expire_minutes=max(0, _env_int("TOKEN_EXPIRE_MIN", DEFAULT_TOKEN_EXPIRE_MIN)),
        cors_origins=_env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    FastAPI dependency; one `Settings` per process.
    """
    return load_settings()
