"""Map a model's free-text SRT answer back onto the original entries."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .models import SubtitleEntry
from .text_utils import split_blocks, strip_code_fence, validate_translation

logger = logging.getLogger(__name__)


@dataclass
class AlignmentReport:
    """对齐结果统计。"""
    expected: int
    received: int
    # 回退为原文的条目位置（chunk 内 0-based）
    fallbacks: List[int] = field(default_factory=list)


def _block_text(block: str) -> str:
    """Extract the subtitle text from one response block."""
    lines = block.split("\n")
    if len(lines) >= 3:
        return "\n".join(lines[2:]).strip()

    # 模型只返回了纯文本：取最后一个非空行。
    # 若模型回显了编号和时间轴却漏掉正文（两行），这里取到的是时间轴行。
    for line in reversed(lines):
        if line.strip():
            return line.strip()
    return ""


def align_with_report(
    raw_response: str,
    chunk: Sequence[SubtitleEntry],
) -> Tuple[List[SubtitleEntry], AlignmentReport]:
    """
    Align response blocks to the chunk by position.

    Block i always pairs with entry i. The id and timestamp come from the
    original entry no matter what the model echoed. Entries without a
    usable block keep their original text.

    Returns:
        (aligned entries, report)
    """
    blocks = split_blocks(strip_code_fence(raw_response or ""))
    report = AlignmentReport(expected=len(chunk), received=len(blocks))

    aligned: List[SubtitleEntry] = []
    for i, orig in enumerate(chunk):
        text = _block_text(blocks[i]) if i < len(blocks) else ""
        if not text:
            report.fallbacks.append(i)
            aligned.append(orig.copy())
            continue

        is_valid, error = validate_translation(orig.text, text)
        if not is_valid:
            logger.debug(f"Entry {orig.id}: {error}")
        aligned.append(orig.copy(text=text))

    if report.received != report.expected:
        logger.warning(
            f"Expected {report.expected} blocks, got {report.received}; "
            f"alignment is positional"
        )
    if report.fallbacks:
        ids = ", ".join(chunk[i].id for i in report.fallbacks)
        logger.warning(f"Kept original text for {len(report.fallbacks)} entries: {ids}")

    return aligned, report


def align_response(
    raw_response: str,
    chunk: Sequence[SubtitleEntry],
) -> List[SubtitleEntry]:
    """Align response blocks to the chunk; see ``align_with_report``."""
    aligned, _ = align_with_report(raw_response, chunk)
    return aligned
