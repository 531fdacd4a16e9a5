"""
Message API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# messages.id is a SERIAL (int4) column.
MESSAGE_ID_MAX = 2_147_483_647


class SendMessageRequest(BaseModel):
    to_username: str = Field(..., min_length=1, max_length=64)
    body: str = Field(..., min_length=1)
