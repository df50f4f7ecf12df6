"""HTML helpers for the public share page."""

from __future__ import annotations

from datetime import datetime
from html import escape

from meeting_notes.models.share import ShareEntry

NOT_FOUND_HTML = "<h1>Not Found</h1><p>This share link is invalid or expired.</p>"

_SHARE_PAGE = """<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Shared Summary</title>
  <style>
    body {{ font-family: system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif; margin: 40px; }}
    pre {{ white-space: pre-wrap; word-wrap: break-word; }}
    .wrap {{ max-width: 900px; margin: 0 auto; }}
    .card {{ border: 1px solid #ddd; border-radius: 10px; padding: 16px; }}
    .muted {{ color: #666; font-size: 12px; }}
  </style>
</head>
<body>
  <div class="wrap">
    <h1>Shared Summary</h1>
    <div class="card">
      <pre>{content}</pre>
    </div>
    <p class="muted">Created: {created}</p>
  </div>
</body>
</html>
"""


def escape_text(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` only; quotes are left alone inside ``<pre>``."""
    return escape(text, quote=False)


def format_timestamp(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def render_share_page(entry: ShareEntry) -> str:
    return _SHARE_PAGE.format(
        content=escape_text(entry.content),
        created=format_timestamp(entry.created_at),
    )
