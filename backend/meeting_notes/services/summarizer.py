"""Abstraction layer around the summarization provider.

The provider is any OpenAI-compatible ``/chat/completions`` endpoint
(OpenRouter by default).  One request is made per call: no retries, no
streaming.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from meeting_notes.config import settings
from meeting_notes.exceptions import ProviderError, ValidationError

logger = logging.getLogger(__name__)

MIN_TRANSCRIPT_LENGTH = 10
TEMPERATURE = 0.2

DEFAULT_INSTRUCTION = (
    "Summarize the following transcript into concise bullet points. "
    "Include an 'Action Items' section at the end."
)

SYSTEM_PROMPT = """You are an assistant that writes clean, structured, business-ready meeting summaries.
- Follow the user's instruction style strictly.
- Prefer bullet points, section headers, and clear action items with owners and due dates when available.
- Keep it concise but complete.
- If transcript seems like a call transcript, infer participants and summarize decisions."""

USER_PROMPT_TEMPLATE = """Instruction: {instruction}

Transcript:
-----------------
{transcript}
-----------------"""


def validate_transcript(transcript: object) -> str:
    if not isinstance(transcript, str) or len(transcript.strip()) < MIN_TRANSCRIPT_LENGTH:
        raise ValidationError(
            f"Provide a transcript with at least {MIN_TRANSCRIPT_LENGTH} characters."
        )
    return transcript


def resolve_instruction(instruction: Optional[str]) -> str:
    if isinstance(instruction, str) and instruction.strip():
        return instruction.strip()
    return DEFAULT_INSTRUCTION


def build_messages(transcript: str, instruction: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": USER_PROMPT_TEMPLATE.format(instruction=instruction, transcript=transcript),
        },
    ]


def _provider_error_text(response: httpx.Response) -> str:
    """Best-effort extraction of the provider's own error message."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return response.text.strip() or response.reason_phrase


def extract_summary(data: Any) -> str:
    """Pull ``choices[0].message.content`` out of a completion payload.

    Anything else (a provider ``error`` object, a missing field, blank text)
    is a :class:`ProviderError`; the raw payload is never handed back as if
    it were a summary.
    """
    if isinstance(data, dict) and data.get("error"):
        error = data["error"]
        message = error.get("message") if isinstance(error, dict) else str(error)
        raise ProviderError(message or "Summarization provider returned an error.")

    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        logger.error("Provider response missing choices[0].message.content: %.500s", data)
        raise ProviderError("No summary generated.")

    if not isinstance(content, str) or not content.strip():
        raise ProviderError("No summary generated.")
    return content.strip()


async def summarize(transcript: object, instruction: Optional[str] = None) -> str:
    """Summarize ``transcript`` following ``instruction`` (or the default one).

    Raises:
        ValidationError: transcript missing or shorter than 10 characters once
            trimmed.  No request is sent in that case.
        ProviderError: non-2xx answer, transport failure, unparseable body or
            empty completion.
    """
    transcript = validate_transcript(transcript)
    instruction = resolve_instruction(instruction)

    url = f"{settings.OPENROUTER_BASE_URL.rstrip('/')}/chat/completions"
    payload = {
        "model": settings.OPENROUTER_MODEL,
        "temperature": TEMPERATURE,
        "messages": build_messages(transcript, instruction),
    }
    headers = {
        "Authorization": f"Bearer {settings.OPENROUTER_API_KEY}",
        "HTTP-Referer": settings.PUBLIC_BASE_URL,
        "X-Title": settings.APP_TITLE,
    }

    logger.info(
        "Requesting summary from %s (model=%s, transcript=%d chars)",
        url, settings.OPENROUTER_MODEL, len(transcript),
    )
    async with httpx.AsyncClient(timeout=settings.LLM_TIMEOUT_SECONDS) as client:
        try:
            response = await client.post(url, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = _provider_error_text(e.response)
            logger.error("HTTP error %s from summarization provider: %s", e.response.status_code, detail)
            raise ProviderError(detail or f"Summarization provider returned HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error("Request to summarization provider failed: %s", e, exc_info=True)
            raise ProviderError(f"Failed to reach summarization provider: {e}") from e

    try:
        data = response.json()
    except ValueError as e:
        logger.error("Summarization provider returned non-JSON body: %.500s", response.text)
        raise ProviderError("Summarization provider returned an unreadable response.") from e

    summary = extract_summary(data)
    logger.info("Summary generated (%d chars)", len(summary))
    return summary
