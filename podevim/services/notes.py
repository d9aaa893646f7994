"""Helpers for free-text notes fields."""

from typing import Optional


def append_note(existing: Optional[str], addition: Optional[str], prefix: str = "") -> Optional[str]:
    """Append a line to a notes field."""
    if not addition:
        return existing
    line = f"{prefix}{addition}"
    return f"{existing}\n{line}" if existing else line
