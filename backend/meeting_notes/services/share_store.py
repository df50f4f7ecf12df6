"""In-memory store behind the share links.

Entries live for as long as the owning :class:`ShareStore` does (normally the
process); there is no expiry or eviction.  The application creates one store
in :func:`meeting_notes.main.create_app` and hands it to the routes through
``app.state`` so tests can build isolated instances.
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from meeting_notes.exceptions import NotFoundError, ValidationError
from meeting_notes.models.share import ShareEntry
from meeting_notes.utils.html import render_share_page

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ShareStore:
    """Thread-safe mapping of share id -> :class:`ShareEntry`."""

    def __init__(
        self,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._entries: Dict[str, ShareEntry] = {}
        self._lock = threading.Lock()
        self._id_factory = id_factory
        self._clock = clock

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, share_id: object) -> bool:
        return share_id in self._entries

    def create(self, content: object) -> str:
        """Store ``content`` and return its new identifier.

        Raises:
            ValidationError: if ``content`` is not a non-empty string.
        """
        if not isinstance(content, str) or not content:
            raise ValidationError("content (string) is required")

        entry = ShareEntry(content=content, created_at=self._clock())
        with self._lock:
            share_id = self._id_factory()
            while share_id in self._entries:
                logger.warning("Share id collision on %s, regenerating", share_id)
                share_id = self._id_factory()
            self._entries[share_id] = entry

        logger.info("Created share %s (%d chars)", share_id, len(content))
        return share_id

    def get(self, share_id: str) -> Optional[ShareEntry]:
        return self._entries.get(share_id)

    def render(self, share_id: str) -> str:
        """Return the HTML page for ``share_id``.

        Raises:
            NotFoundError: if the id was never issued by this store.
        """
        entry = self.get(share_id)
        if entry is None:
            raise NotFoundError("This share link is invalid or expired.")
        return render_share_page(entry)
