"""Request/response schemas for ``POST /api/summarize``."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class SummarizeRequest(BaseModel):
    # Both optional at the schema level: length and emptiness rules live in
    # the summarizer service so they produce the service's own messages.
    transcript: Optional[str] = None
    instruction: Optional[str] = None


class SummarizeResponse(BaseModel):
    summary: str
