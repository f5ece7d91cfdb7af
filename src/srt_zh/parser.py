"""SRT file parsing and saving utilities."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Optional

from .errors import ParseError
from .models import SubtitleEntry
from .text_utils import split_blocks

logger = logging.getLogger(__name__)

# 单个 SRT 文件大小上限
MAX_FILE_SIZE = 50 * 1024 * 1024


def parse_srt(content: str, strict: bool = False) -> List[SubtitleEntry]:
    """
    Parse SRT file content into list of SubtitleEntry objects.

    Each block separated by blank lines is read as: id line, timestamp line,
    then one or more text lines. Blocks missing any of the three parts are
    dropped.

    Args:
        content: Raw SRT file content as string
        strict: Raise ParseError instead of returning an empty list

    Returns:
        List of parsed SubtitleEntry objects, in file order
    """
    entries: List[SubtitleEntry] = []

    for block_num, block in enumerate(split_blocks(content), 1):
        lines = block.split("\n")
        if len(lines) < 3:
            logger.debug(f"Skipping block {block_num}: only {len(lines)} line(s)")
            continue

        entry_id = lines[0].strip()
        timestamp = lines[1].strip()
        text = "\n".join(lines[2:]).strip()

        if not (entry_id and timestamp and text):
            logger.debug(f"Skipping block {block_num}: empty id, timestamp or text")
            continue

        entries.append(SubtitleEntry(entry_id, timestamp, text))

    if not entries:
        logger.warning("No valid SRT entries found in content")
        if strict:
            raise ParseError("Unable to parse SRT content; make sure the file is a valid SRT file.")

    return entries


def serialize_srt(entries: Sequence[SubtitleEntry]) -> str:
    """Render entries back into SRT text, one blank line between entries."""
    return "\n".join(e.to_srt() for e in entries)


def validate_srt_file(path: Path) -> Optional[str]:
    """
    Validate SRT file before processing.

    Args:
        path: Path to SRT file

    Returns:
        Error message if invalid, None if valid
    """
    if not path.exists():
        return f"File not found: {path}"

    if not path.is_file():
        return f"Not a file: {path}"

    suffix = path.suffix.lower()
    if suffix != '.srt':
        return f"Invalid file extension: {suffix} (expected .srt)"

    size = path.stat().st_size
    if size == 0:
        return "File is empty"
    if size > MAX_FILE_SIZE:
        return f"File too large: {size / 1024 / 1024:.1f}MB (max 50MB)"

    return None


def read_srt(path: Path) -> List[SubtitleEntry]:
    """
    Read and strictly parse an SRT file.

    Raises:
        ParseError: if the file holds no valid entries
    """
    content = path.read_text(encoding="utf-8-sig")
    entries = parse_srt(content, strict=True)
    logger.info(f"Parsed {len(entries)} subtitle entries from {path}")
    return entries


def save_srt(entries: Sequence[SubtitleEntry], path: Path) -> None:
    """
    Save SubtitleEntry list to SRT file.

    Args:
        entries: Sequence of SubtitleEntry objects to save
        path: Output file path
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        f.write(serialize_srt(entries))

    logger.info(f"Saved {len(entries)} entries to {path}")
