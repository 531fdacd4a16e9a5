"""
Message business logic.

Scope:
- send a message as the current user
- message detail, visible to sender and recipient only
- mark as read, recipient only
"""

from __future__ import annotations

import logging

from core.errors import AuthzError, NotFoundError
from users.service import user_profile

from . import repository

logger = logging.getLogger(__name__)


def _principal(current_user: dict) -> str:
    return str(current_user.get("username") or "")


async def send_message(*, current_user: dict, to_username: str, body: str) -> dict:
    row = await repository.create_message(
        from_username=_principal(current_user),
        to_username=to_username,
        body=body,
    )
    logger.info(
        "message_sent id=%s from=%s to=%s",
        row["id"],
        row["from_username"],
        row["to_username"],
    )
    return {
        "id": int(row["id"]),
        "from_username": row["from_username"],
        "to_username": row["to_username"],
        "body": row["body"],
        "sent_at": row["sent_at"],
    }


async def get_message(message_id: int, *, current_user: dict) -> dict:
    row = await repository.get_message(message_id)
    if row is None:
        raise NotFoundError(f"No such message: {message_id}")

    username = _principal(current_user)
    if username not in (row["from_username"], row["to_username"]):
        logger.warning("message_view_denied id=%s username=%s", message_id, username)
        raise AuthzError("Cannot read this message.")

    return {
        "id": int(row["id"]),
        "body": row["body"],
        "sent_at": row["sent_at"],
        "read_at": row["read_at"],
        "from_user": user_profile(row, "from_"),
        "to_user": user_profile(row, "to_"),
    }


async def mark_read(message_id: int, *, current_user: dict) -> dict:
    participants = await repository.get_participants(message_id)
    if participants is None:
        raise NotFoundError(f"No such message: {message_id}")

    username = _principal(current_user)
    if username != participants["to_username"]:
        logger.warning("mark_read_denied id=%s username=%s", message_id, username)
        raise AuthzError("Only the recipient can mark this message as read.")

    row = await repository.mark_read(message_id)
    if row is None:
        raise NotFoundError(f"No such message: {message_id}")
    return {"id": int(row["id"]), "read_at": row["read_at"]}
