"""Exception types raised by the translation pipeline."""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .llm_client import APIErrorType


class SrtTranslatorError(Exception):
    """Base class for all srt_zh errors."""


class ConfigError(SrtTranslatorError, ValueError):
    """Invalid or incomplete configuration."""


class ParseError(SrtTranslatorError):
    """Input text contains no valid SRT entries."""


class RemoteError(SrtTranslatorError):
    """The remote model call failed or returned no usable text."""

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        error_type: Optional["APIErrorType"] = None,
    ):
        super().__init__(message)
        self.cause = cause
        self.error_type = error_type


class ChunkFailure(SrtTranslatorError):
    """
    A chunk could not be translated within the retry budget.

    Attributes:
        start_index: 1-based index of the first entry in the failed chunk
        attempts: Number of attempts made
        cause: The last error seen
    """

    def __init__(self, start_index: int, attempts: int, cause: BaseException):
        self.start_index = start_index
        self.attempts = attempts
        self.cause = cause
        super().__init__(
            f"Chunk starting at entry #{start_index} failed after "
            f"{attempts} attempts: {cause}"
        )
