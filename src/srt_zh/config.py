"""Configuration and constants."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables once
load_dotenv()

API_KEY_ENV = "DEEPSEEK_API_KEY"
DEFAULT_BASE_URL = "https://api.deepseek.com"
DEFAULT_MODEL = "deepseek-chat"

# 每个请求的字幕条数
DEFAULT_CHUNK_SIZE = 20
# 首次请求之后的重试次数
DEFAULT_MAX_RETRIES = 3
# 指数退避基数：第 n 次重试前等待 2^n * base 毫秒
DEFAULT_BACKOFF_BASE_MS = 1000
DEFAULT_TEMPERATURE = 0.2


@dataclass
class TranslatorConfig:
    """Configuration for subtitle translator."""

    # API settings
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    model_name: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    timeout: float = 60.0

    # Processing settings
    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_retries: int = DEFAULT_MAX_RETRIES
    backoff_base_ms: int = DEFAULT_BACKOFF_BASE_MS

    # Output settings
    output_prefix: str = "translated_"

    def __post_init__(self):
        """Load API key from environment if not provided."""
        if self.api_key is None:
            self.api_key = os.environ.get(API_KEY_ENV)

    @classmethod
    def from_args(cls, args) -> "TranslatorConfig":
        """Create config from argparse namespace."""
        return cls(
            api_key=getattr(args, 'api_key', None) or None,
            base_url=getattr(args, 'base_url', DEFAULT_BASE_URL),
            model_name=getattr(args, 'model_name', DEFAULT_MODEL),
            temperature=getattr(args, 'temperature', DEFAULT_TEMPERATURE),
            timeout=getattr(args, 'timeout', 60.0),
            chunk_size=getattr(args, 'chunk_size', DEFAULT_CHUNK_SIZE),
            max_retries=getattr(args, 'max_retries', DEFAULT_MAX_RETRIES),
            backoff_base_ms=getattr(args, 'backoff_base_ms', DEFAULT_BACKOFF_BASE_MS),
        )

    @property
    def max_attempts(self) -> int:
        """Total attempts per chunk (first try plus retries)."""
        return self.max_retries + 1

    def backoff_seconds(self, attempt: int) -> float:
        """Delay before retry number ``attempt`` (1-based)."""
        return (2 ** attempt) * self.backoff_base_ms / 1000.0

    def validate_pipeline(self) -> Optional[str]:
        """Validate only the options the orchestrator uses."""
        if self.chunk_size < 1 or self.chunk_size > 100:
            return f"Chunk size must be 1-100, got {self.chunk_size}"

        if self.max_retries < 0 or self.max_retries > 10:
            return f"Max retries must be 0-10, got {self.max_retries}"

        if self.backoff_base_ms < 0:
            return f"Backoff base must be >= 0 ms, got {self.backoff_base_ms}"

        return None

    def validate(self) -> Optional[str]:
        """
        Validate configuration.

        Returns:
            Error message if invalid, None if valid
        """
        if not self.api_key:
            return f"API key is required. Set {API_KEY_ENV} or use --api-key"

        if self.temperature < 0 or self.temperature > 2:
            return f"Temperature must be 0-2, got {self.temperature}"

        if self.timeout <= 0:
            return f"Timeout must be positive, got {self.timeout}"

        return self.validate_pipeline()
