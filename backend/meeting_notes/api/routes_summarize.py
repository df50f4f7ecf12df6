"""Transcript summarization endpoint."""

from fastapi import APIRouter

from ..models.summary import SummarizeRequest, SummarizeResponse
from ..services.summarizer import summarize

router = APIRouter()


@router.post("/summarize", response_model=SummarizeResponse)
async def summarize_transcript(body: SummarizeRequest) -> SummarizeResponse:
    """Summarize a transcript; errors surface through the app's exception handlers."""
    summary = await summarize(body.transcript, body.instruction)
    return SummarizeResponse(summary=summary)
