"""
Message API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/messages")


@router.get("/{message_id}")
async def get_message(
    message_id: int = Path(..., ge=1, le=schemas.MESSAGE_ID_MAX),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    """
    Message detail with both users expanded. Sender or recipient only.
    """
    message = await service.get_message(message_id, current_user=current_user)
    return {"message": message}


@router.post("")
async def send_message(
    request: schemas.SendMessageRequest,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    message = await service.send_message(
        current_user=current_user,
        to_username=request.to_username,
        body=request.body,
    )
    return {"message": message}


@router.post("/{message_id}/read")
async def mark_read(
    message_id: int = Path(..., ge=1, le=schemas.MESSAGE_ID_MAX),
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    """
    Mark a message as read. Recipient only; repeat calls keep the first read_at.
    """
    message = await service.mark_read(message_id, current_user=current_user)
    return {"message": message}
