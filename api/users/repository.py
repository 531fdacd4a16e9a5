"""
User persistence helpers.

The `password` column is selected only by `get_password_hash`; every other
read returns profile fields.
"""

from __future__ import annotations

from datetime import datetime

import asyncpg

from core import db
from core.errors import ConflictError, ValidationError


async def create_user(
    *,
    username: str,
    password_hash: str,
    first_name: str,
    last_name: str,
    phone: str,
) -> dict:
    try:
        row = await db.fetch_one(
            """
            INSERT INTO users (username, password, first_name, last_name, phone, join_at)
            VALUES ($1, $2, $3, $4, $5, now())
            RETURNING username, join_at
            """,
            username,
            password_hash,
            first_name,
            last_name,
            phone,
        )
    except asyncpg.UniqueViolationError as exc:
        raise ConflictError(f"Username already taken: {username}") from exc
    except asyncpg.DataError as exc:
        # e.g. NUL bytes, which TEXT columns cannot store.
        raise ValidationError("Invalid user fields.") from exc
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def get_password_hash(username: str) -> str | None:
    try:
        return await db.fetch_value(
            "SELECT password FROM users WHERE username = $1",
            username,
        )
    except asyncpg.DataError:
        # A username the column cannot hold cannot belong to anyone.
        return None


async def update_login_timestamp(username: str) -> datetime | None:
    # GREATEST keeps successive logins strictly increasing even when two
    # calls land on the same clock tick.
    return await db.fetch_value(
        """
        UPDATE users
        SET last_login_at = GREATEST(
              now(),
              COALESCE(last_login_at + interval '1 microsecond', now())
            )
        WHERE username = $1
        RETURNING last_login_at
        """,
        username,
    )


async def list_users() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT username, first_name, last_name, phone
        FROM users
        ORDER BY first_name, username
        """
    )


async def get_user(username: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT username, first_name, last_name, phone, join_at, last_login_at
        FROM users
        WHERE username = $1
        """,
        username,
    )


async def user_exists(username: str) -> bool:
    found = await db.fetch_value("SELECT 1 FROM users WHERE username = $1", username)
    return found is not None


async def list_messages_from(username: str) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT m.id,
               m.to_username,
               u.first_name AS to_first_name,
               u.last_name AS to_last_name,
               u.phone AS to_phone,
               m.body,
               m.sent_at,
               m.read_at
        FROM messages AS m
        JOIN users AS u ON u.username = m.to_username
        WHERE m.from_username = $1
        ORDER BY m.sent_at, m.id
        """,
        username,
    )


async def list_messages_to(username: str) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT m.id,
               m.from_username,
               u.first_name AS from_first_name,
               u.last_name AS from_last_name,
               u.phone AS from_phone,
               m.body,
               m.sent_at,
               m.read_at
        FROM messages AS m
        JOIN users AS u ON u.username = m.from_username
        WHERE m.to_username = $1
        ORDER BY m.sent_at, m.id
        """,
        username,
    )
