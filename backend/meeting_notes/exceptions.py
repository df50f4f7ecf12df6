"""Domain exceptions and their HTTP status codes.

Services raise these; the handlers registered in :mod:`meeting_notes.main`
turn them into ``{"error": ...}`` responses.
"""

from __future__ import annotations

from fastapi import status


class AppBaseException(Exception):
    """Domain-level base exception so we can map to JSON responses easily."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppBaseException):
    """Client-supplied data fails a precondition."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppBaseException):
    """Unknown share identifier."""

    status_code = status.HTTP_404_NOT_FOUND


class ProviderError(AppBaseException):
    """The summarization API failed or answered with something unusable."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class MailError(AppBaseException):
    """SMTP submission failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
