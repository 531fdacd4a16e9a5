"""
Message persistence helpers.

Nothing here checks who is asking; authorization happens in `service.py`.
"""

from __future__ import annotations

import asyncpg

from core import db
from core.errors import ValidationError


async def create_message(*, from_username: str, to_username: str, body: str) -> dict:
    try:
        row = await db.fetch_one(
            """
            INSERT INTO messages (from_username, to_username, body, sent_at)
            VALUES ($1, $2, $3, now())
            RETURNING id, from_username, to_username, body, sent_at
            """,
            from_username,
            to_username,
            body,
        )
    except asyncpg.ForeignKeyViolationError as exc:
        raise ValidationError(f"Unknown recipient or sender: {to_username}") from exc
    except asyncpg.DataError as exc:
        raise ValidationError("Invalid message fields.") from exc
    if row is None:
        raise RuntimeError("Failed to create message.")
    return row


async def get_message(message_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT m.id,
               m.body,
               m.sent_at,
               m.read_at,
               f.username AS from_username,
               f.first_name AS from_first_name,
               f.last_name AS from_last_name,
               f.phone AS from_phone,
               t.username AS to_username,
               t.first_name AS to_first_name,
               t.last_name AS to_last_name,
               t.phone AS to_phone
        FROM messages AS m
        JOIN users AS f ON f.username = m.from_username
        JOIN users AS t ON t.username = m.to_username
        WHERE m.id = $1
        """,
        message_id,
    )


async def get_participants(message_id: int) -> dict | None:
    return await db.fetch_one(
        "SELECT id, from_username, to_username FROM messages WHERE id = $1",
        message_id,
    )


async def mark_read(message_id: int) -> dict | None:
    # read_at is set once; later calls return the original timestamp.
    return await db.fetch_one(
        """
        UPDATE messages
        SET read_at = COALESCE(read_at, now())
        WHERE id = $1
        RETURNING id, read_at
        """,
        message_id,
    )
