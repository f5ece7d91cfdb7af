"""Data models for SRT subtitle entries."""

from __future__ import annotations
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SubtitleEntry:
    """Represents a single subtitle entry in SRT format.

    ``id`` and ``timestamp`` are opaque strings copied verbatim from the
    source file; only ``text`` is ever replaced.
    """

    id: str
    timestamp: str
    text: str

    def to_srt(self) -> str:
        """Convert entry to an SRT block (without the separating blank line)."""
        return f"{self.id}\n{self.timestamp}\n{self.text}\n"

    def copy(self, text: str | None = None) -> "SubtitleEntry":
        """Create a copy, optionally with new text. id/timestamp never change."""
        if text is None:
            return replace(self)
        return replace(self, text=text)
