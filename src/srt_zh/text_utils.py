"""Text processing utilities."""

from __future__ import annotations

import re
from typing import List


# 空行分隔（允许空行中含空白字符，连续多个空行视为一个分隔）
BLOCK_SEPARATOR = re.compile(r"\n\s*\n")

# 模型偶尔会把整段输出包在 ``` 代码块里
CODE_FENCE = re.compile(r"^```[\w-]*\s*\n(.*?)\n?\s*```$", re.DOTALL)

# CJK 统一表意文字及扩展 A
CJK_CHAR = re.compile("[\u3400-\u4dbf\u4e00-\u9fff]")


def normalize_newlines(text: str) -> str:
    """Convert CRLF / CR line endings to LF and drop a leading BOM."""
    if not text:
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.lstrip("\ufeff")


def strip_code_fence(text: str) -> str:
    """
    Remove a Markdown code fence wrapping the whole text.

    Args:
        text: Raw model output

    Returns:
        Inner content if fenced, otherwise the stripped text
    """
    clean = text.strip()
    match = CODE_FENCE.match(clean)
    if match:
        return match.group(1).strip()
    return clean


def split_blocks(text: str) -> List[str]:
    """Split text into blocks on blank-line boundaries."""
    text = normalize_newlines(text).strip()
    if not text:
        return []
    return BLOCK_SEPARATOR.split(text)


def contains_cjk(text: str) -> bool:
    """Return True if the text has at least one Chinese character."""
    return bool(text) and CJK_CHAR.search(text) is not None


def validate_translation(original: str, translated: str) -> tuple[bool, str]:
    """
    Check a translated subtitle text for obvious problems.

    Only used for diagnostics; a failed check never rejects the text.

    Args:
        original: Original text
        translated: Translated text

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not translated or not translated.strip():
        return False, "Empty translation"

    if translated.strip() == original.strip():
        return False, "Translation is identical to original"

    # 检查是否全是特殊字符
    if not re.sub(r"[\s\W]", "", translated):
        return False, "Translation contains only special characters"

    if not contains_cjk(translated):
        return False, "Translation contains no Chinese characters"

    return True, ""
