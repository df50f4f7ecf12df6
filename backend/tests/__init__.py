# Ensure the `backend` directory is importable so `from meeting_notes.*` works
from __future__ import annotations

import sys
import tempfile
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT_DIR))

# Keep test runs away from real services and the repository's log directory
import os
os.environ.setdefault("LOG_DIR", str(Path(tempfile.gettempdir()) / "meeting-notes-test-logs"))
os.environ.setdefault("OPENROUTER_API_KEY", "test-key")
os.environ.setdefault("PUBLIC_BASE_URL", "http://notes.test")
