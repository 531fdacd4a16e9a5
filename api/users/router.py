"""
User directory API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import service

router = APIRouter(prefix="/users")


@router.get("")
async def list_users(
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    """
    Basic info on all users, ordered by first name.
    """
    return {"users": await service.all_users()}


@router.get("/{username}")
async def get_user(
    username: str,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    service.ensure_correct_user(current_user, username)
    return {"user": await service.get_user(username)}


@router.get("/{username}/to")
async def messages_to(
    username: str,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    service.ensure_correct_user(current_user, username)
    return {"messages": await service.messages_to(username)}


@router.get("/{username}/from")
async def messages_from(
    username: str,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    service.ensure_correct_user(current_user, username)
    return {"messages": await service.messages_from(username)}
