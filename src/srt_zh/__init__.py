"""
srt-zh - LLM-powered English to Chinese SRT subtitle translator.

Features:
- Line-aligned translation: ids and timestamps are never altered
- Fixed-size batches sent strictly in order
- Retry with exponential backoff per batch
- Graceful fallback to source text when the model drops entries
"""

__version__ = "1.0.0"

from .models import SubtitleEntry
from .errors import SrtTranslatorError, ConfigError, ParseError, RemoteError, ChunkFailure
from .parser import parse_srt, serialize_srt, read_srt, save_srt, validate_srt_file
from .chunker import split_chunks
from .aligner import align_response, align_with_report, AlignmentReport
from .llm_client import LLMClient, create_client
from .translator import (
    SYSTEM_INSTRUCTION,
    SubtitleTranslator,
    TranslationRun,
    RunStatus,
    translate_entries,
    build_chunk_text,
)
from .config import TranslatorConfig
from .progress import percent_complete, ProgressBar

__all__ = [
    # Models
    "SubtitleEntry",
    "TranslationRun",
    "RunStatus",
    "TranslatorConfig",
    "AlignmentReport",
    # Errors
    "SrtTranslatorError",
    "ConfigError",
    "ParseError",
    "RemoteError",
    "ChunkFailure",
    # Parsing
    "parse_srt",
    "serialize_srt",
    "read_srt",
    "save_srt",
    "validate_srt_file",
    # Pipeline
    "split_chunks",
    "align_response",
    "align_with_report",
    "build_chunk_text",
    "translate_entries",
    "SubtitleTranslator",
    "SYSTEM_INSTRUCTION",
    # Client
    "LLMClient",
    "create_client",
    # Progress
    "percent_complete",
    "ProgressBar",
]
