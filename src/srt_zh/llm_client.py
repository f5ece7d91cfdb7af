"""LLM API client utilities."""

from __future__ import annotations

import logging
from typing import List, Dict, Optional
from enum import Enum

from openai import (
    AsyncOpenAI,
    APIConnectionError,
    RateLimitError,
    AuthenticationError,
    BadRequestError,
    APIStatusError,
)

from .config import DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_TEMPERATURE
from .errors import RemoteError

logger = logging.getLogger(__name__)


class APIErrorType(Enum):
    """API 错误类型分类。"""
    RATE_LIMIT = "rate_limit"      # 429
    CONNECTION = "connection"       # 网络问题
    AUTH = "auth"                   # 401
    BAD_REQUEST = "bad_request"     # 400
    SERVER = "server"               # 500+
    EMPTY_RESPONSE = "empty_response"
    UNKNOWN = "unknown"


def classify_error(error: BaseException) -> APIErrorType:
    """
    分类 API 错误，用于日志。

    不决定是否重试：所有 RemoteError 都由调用方按同一策略重试。
    """
    if isinstance(error, RemoteError) and error.error_type is not None:
        return error.error_type
    if isinstance(error, RateLimitError):
        return APIErrorType.RATE_LIMIT
    elif isinstance(error, APIConnectionError):
        return APIErrorType.CONNECTION
    elif isinstance(error, AuthenticationError):
        return APIErrorType.AUTH
    elif isinstance(error, BadRequestError):
        return APIErrorType.BAD_REQUEST
    elif isinstance(error, APIStatusError):
        if error.status_code >= 500:
            return APIErrorType.SERVER
        return APIErrorType.UNKNOWN
    else:
        return APIErrorType.UNKNOWN


class LLMClient:
    """
    Single-shot text-in/text-out wrapper around a chat completions API.

    Each call makes exactly one request. Retrying is left to the caller,
    so the SDK's own retry loop is disabled in ``create_client``.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature

    async def translate(self, chunk_text: str, instructions: str) -> str:
        """
        Send one chunk to the model.

        Args:
            chunk_text: SRT blocks to translate
            instructions: System instruction

        Returns:
            Raw response text (stripped)

        Raises:
            RemoteError: on any transport/API failure or an empty response
        """
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": instructions},
            {"role": "user", "content": chunk_text},
        ]

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
            )
        except Exception as e:
            error_type = classify_error(e)
            raise RemoteError(
                f"Request to {self.model} failed ({error_type.value}): {e}",
                cause=e,
                error_type=error_type,
            ) from e

        content: Optional[str] = None
        if response.choices:
            content = response.choices[0].message.content

        if not content or not content.strip():
            raise RemoteError(
                f"Empty response from {self.model}",
                error_type=APIErrorType.EMPTY_RESPONSE,
            )

        logger.debug(f"Received {len(content)} chars from {self.model}")
        return content.strip()


def create_client(
    api_key: str,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = 60.0
) -> AsyncOpenAI:
    """
    Create an AsyncOpenAI client.

    Args:
        api_key: API key for authentication
        base_url: API base URL
        timeout: Default timeout for requests

    Returns:
        Configured AsyncOpenAI client
    """
    return AsyncOpenAI(
        api_key=api_key,
        base_url=base_url,
        timeout=timeout,
        max_retries=0,
    )
