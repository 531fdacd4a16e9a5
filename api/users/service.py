"""
User directory business logic.
"""

from __future__ import annotations

import logging
from datetime import datetime

from core.errors import AuthzError, NotFoundError

from . import repository

logger = logging.getLogger(__name__)


def user_profile(row: dict, prefix: str = "") -> dict:
    """
    Build `{username, first_name, last_name, phone}` from a (possibly joined)
    row whose columns carry `prefix`, e.g. `to_username`, `to_first_name`.
    """
    return {
        "username": row[f"{prefix}username"],
        "first_name": row[f"{prefix}first_name"],
        "last_name": row[f"{prefix}last_name"],
        "phone": row[f"{prefix}phone"],
    }


def ensure_correct_user(current_user: dict, username: str) -> None:
    if str(current_user.get("username") or "") != username:
        raise AuthzError("Not allowed to access another user's data.")


async def update_login_timestamp(username: str) -> datetime:
    last_login_at = await repository.update_login_timestamp(username)
    if last_login_at is None:
        raise NotFoundError(f"There is no user with username: {username}")
    return last_login_at


async def all_users() -> list[dict]:
    rows = await repository.list_users()
    return [user_profile(row) for row in rows]


async def get_user(username: str) -> dict:
    row = await repository.get_user(username)
    if row is None:
        raise NotFoundError(f"There is no user with username: {username}")
    return {
        "username": row["username"],
        "first_name": row["first_name"],
        "last_name": row["last_name"],
        "phone": row["phone"],
        "join_at": row["join_at"],
        "last_login_at": row["last_login_at"],
    }


async def _ensure_exists(username: str) -> None:
    if not await repository.user_exists(username):
        raise NotFoundError(f"There is no user with username: {username}")


async def messages_from(username: str) -> list[dict]:
    await _ensure_exists(username)
    rows = await repository.list_messages_from(username)
    return [
        {
            "id": int(row["id"]),
            "to_user": user_profile(row, "to_"),
            "body": row["body"],
            "sent_at": row["sent_at"],
            "read_at": row["read_at"],
        }
        for row in rows
    ]


async def messages_to(username: str) -> list[dict]:
    await _ensure_exists(username)
    rows = await repository.list_messages_to(username)
    return [
        {
            "id": int(row["id"]),
            "from_user": user_profile(row, "from_"),
            "body": row["body"],
            "sent_at": row["sent_at"],
            "read_at": row["read_at"],
        }
        for row in rows
    ]
