"""Share-link models.

``ShareEntry`` is what the share store keeps in memory; the other two are the
wire schemas of ``POST /api/create-share``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ShareEntry(BaseModel):
    """A stored blob of text and the moment it was submitted. Never mutated."""

    model_config = ConfigDict(frozen=True)

    content: str
    created_at: datetime


class CreateShareRequest(BaseModel):
    content: Optional[str] = None


class CreateShareResponse(BaseModel):
    id: str
    url: str
