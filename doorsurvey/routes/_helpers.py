"""Shared route helpers used across multiple route modules."""

from __future__ import annotations

import re

_SAFE_FILENAME_RE = re.compile(r"[^a-zA-Z0-9._-]")


def safe_filename(name: str) -> str:
    """Sanitize *name* for use in Content-Disposition headers."""
    return _SAFE_FILENAME_RE.sub("_", name)[:200] or "download"
