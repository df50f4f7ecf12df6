"""Schemas for ``POST /api/send-email``.

The canonical body is ``{"to": ..., "subject": ..., "content": ...}``; ``to``
accepts a single address or a list of addresses.
"""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SendEmailRequest(BaseModel):
    to: Optional[Union[str, List[str]]] = None
    subject: Optional[str] = None
    content: Optional[str] = None


class SendEmailResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    message_id: Optional[str] = Field(default=None, alias="messageId")
