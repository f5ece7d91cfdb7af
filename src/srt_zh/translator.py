"""Core translation logic using LLM."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Protocol, Sequence, Tuple

from .aligner import AlignmentReport, align_with_report
from .chunker import chunk_starts, split_chunks
from .config import TranslatorConfig
from .errors import ChunkFailure, ConfigError, RemoteError
from .llm_client import LLMClient, classify_error, create_client
from .models import SubtitleEntry
from .progress import percent_complete

logger = logging.getLogger(__name__)


SYSTEM_INSTRUCTION = """You are a professional subtitle translator. Translate English SRT subtitles into natural, fluent Simplified Chinese.

## Rules:
1. Keep every subtitle number (ID) and timestamp line exactly as given.
2. Strict one-to-one correspondence: each input entry produces exactly one output entry.
3. Never merge, split or reorder entries, and never move text between entries.
4. Output complete SRT, but the text lines must contain only Chinese. Do not include any of the English source text.
5. Use accurate, standard terminology and natural Chinese phrasing.
6. Output only the translated SRT. No greetings, notes or explanations.

## Example input:
1
00:00:01,000 --> 00:00:04,000
We are analyzing the quantum entanglement.

## Example output:
1
00:00:01,000 --> 00:00:04,000
我们正在分析量子纠缠现象。"""


ProgressCallback = Callable[[int], None]
SleepFunc = Callable[[float], Awaitable[None]]


class TranslationClient(Protocol):
    """Anything that can turn one chunk of SRT text into a raw model answer."""

    async def translate(self, chunk_text: str, instructions: str) -> str:
        ...


class RunStatus(Enum):
    """翻译任务状态。"""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class TranslationRun:
    """单次翻译任务的运行状态。"""

    total: int = 0
    translated: int = 0
    status: RunStatus = RunStatus.IDLE
    error: Optional[str] = None
    # 因模型漏译而保留原文的条目数
    fallbacks: int = 0

    @property
    def percent(self) -> int:
        return percent_complete(self.translated, self.total)

    @property
    def is_finished(self) -> bool:
        return self.status in (RunStatus.COMPLETED, RunStatus.FAILED)


StateCallback = Callable[[TranslationRun], None]


def build_chunk_text(chunk: Sequence[SubtitleEntry]) -> str:
    """Render a chunk as SRT blocks separated by blank lines."""
    return "\n\n".join(f"{e.id}\n{e.timestamp}\n{e.text}" for e in chunk)


async def translate_chunk(
    client: TranslationClient,
    chunk: Sequence[SubtitleEntry],
    config: TranslatorConfig,
    start_index: int,
    sleep: SleepFunc = asyncio.sleep,
) -> Tuple[List[SubtitleEntry], AlignmentReport]:
    """
    Translate one chunk with retry and exponential backoff.

    Only RemoteError is retried. An alignment shortfall is not an error
    and is handled by the aligner.

    Args:
        client: Translation client
        chunk: Entries to translate
        config: Supplies max_retries and backoff_base_ms
        start_index: 1-based index of the chunk's first entry
        sleep: Awaitable sleep, replaced in tests

    Returns:
        (translated entries, alignment report); entries have the same
        length and order as ``chunk``

    Raises:
        ChunkFailure: when every attempt failed
    """
    chunk_text = build_chunk_text(chunk)
    max_attempts = config.max_attempts
    last_error: Optional[RemoteError] = None

    for attempt in range(1, max_attempts + 1):
        try:
            raw = await client.translate(chunk_text, SYSTEM_INSTRUCTION)
        except RemoteError as e:
            last_error = e
            if attempt >= max_attempts:
                break

            error_type = classify_error(e)
            delay = config.backoff_seconds(attempt)
            logger.warning(
                f"Chunk at #{start_index}: attempt {attempt}/{max_attempts} failed "
                f"({error_type.value}): {e}. Retrying in {delay:g}s..."
            )
            await sleep(delay)
            continue

        return align_with_report(raw, chunk)

    logger.error(f"Chunk at #{start_index}: all {max_attempts} attempts failed. Last error: {last_error}")
    raise ChunkFailure(start_index, max_attempts, last_error)


async def translate_entries(
    entries: Sequence[SubtitleEntry],
    client: TranslationClient,
    config: Optional[TranslatorConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
    on_state_change: Optional[StateCallback] = None,
    sleep: SleepFunc = asyncio.sleep,
) -> List[SubtitleEntry]:
    """
    Translate all entries chunk by chunk, strictly in order.

    Args:
        entries: Parsed subtitle entries
        client: Translation client
        config: Chunk size and retry policy (defaults if omitted)
        on_progress: Called after each chunk with the cumulative entry count
        on_state_change: Called with the run state on every status change
        sleep: Awaitable sleep used for backoff

    Returns:
        Translated entries, same length and order as ``entries``

    Raises:
        ChunkFailure: a chunk failed after all retries; no partial result
        ConfigError: invalid chunk size or retry settings
    """
    config = config or TranslatorConfig()
    error = config.validate_pipeline()
    if error:
        raise ConfigError(error)

    run = TranslationRun(total=len(entries))

    def set_status(status: RunStatus, error: Optional[str] = None) -> None:
        run.status = status
        run.error = error
        if on_state_change:
            on_state_change(run)

    set_status(RunStatus.RUNNING)

    chunks = split_chunks(entries, config.chunk_size)
    starts = chunk_starts(len(entries), config.chunk_size)
    logger.info(f"Translating {len(entries)} entries in {len(chunks)} chunks...")

    results: List[SubtitleEntry] = []
    for chunk_idx, (start, chunk) in enumerate(zip(starts, chunks), 1):
        logger.debug(f"Chunk {chunk_idx}/{len(chunks)}: entries #{start + 1}-#{start + len(chunk)}")
        try:
            translated, report = await translate_chunk(client, chunk, config, start + 1, sleep)
        except Exception as e:
            set_status(RunStatus.FAILED, str(e))
            raise

        results.extend(translated)
        run.translated = len(results)
        run.fallbacks += len(report.fallbacks)
        if on_progress:
            on_progress(run.translated)

    set_status(RunStatus.COMPLETED)
    if run.fallbacks:
        logger.warning(f"{run.fallbacks} entries kept their original text")
    logger.info(f"Translated {len(results)} entries")
    return results


class SubtitleTranslator:
    """
    Entry point for front ends.

    Holds the client and config, and exposes the state of the latest run
    as ``self.run``. Every ``translate`` call starts over from the full input.
    """

    def __init__(
        self,
        client: TranslationClient,
        config: Optional[TranslatorConfig] = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        self.client = client
        self.config = config or TranslatorConfig()
        self.sleep = sleep
        self.run = TranslationRun()

    @classmethod
    def from_config(cls, config: TranslatorConfig) -> "SubtitleTranslator":
        """Build a translator talking to the configured OpenAI-compatible API."""
        error = config.validate()
        if error:
            raise ConfigError(error)

        openai_client = create_client(config.api_key, config.base_url, config.timeout)
        client = LLMClient(openai_client, config.model_name, config.temperature)
        return cls(client, config)

    async def translate(
        self,
        entries: Sequence[SubtitleEntry],
        on_progress: Optional[ProgressCallback] = None,
        on_state_change: Optional[StateCallback] = None,
    ) -> List[SubtitleEntry]:
        def track(run: TranslationRun) -> None:
            self.run = run
            if on_state_change:
                on_state_change(run)

        return await translate_entries(
            entries,
            self.client,
            self.config,
            on_progress=on_progress,
            on_state_change=track,
            sleep=self.sleep,
        )
