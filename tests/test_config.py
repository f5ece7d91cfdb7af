"""Tests for configuration."""

import argparse

import pytest
from srt_zh.config import TranslatorConfig, API_KEY_ENV


class TestTranslatorConfig:

    def test_defaults(self):
        config = TranslatorConfig(api_key="k")
        assert config.chunk_size == 20
        assert config.max_retries == 3
        assert config.backoff_base_ms == 1000
        assert config.temperature == 0.2
        assert config.max_attempts == 4

    def test_backoff_schedule(self):
        config = TranslatorConfig(api_key="k")
        assert [config.backoff_seconds(n) for n in (1, 2, 3)] == [2.0, 4.0, 8.0]

    def test_backoff_scales_with_base(self):
        config = TranslatorConfig(api_key="k", backoff_base_ms=10)
        assert config.backoff_seconds(2) == 0.04

    def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV, "sk-env")
        assert TranslatorConfig().api_key == "sk-env"

    def test_from_args(self, monkeypatch):
        monkeypatch.delenv(API_KEY_ENV, raising=False)
        args = argparse.Namespace(
            api_key="sk-arg",
            base_url="https://example.com",
            model_name="m",
            temperature=0.5,
            timeout=10.0,
            chunk_size=5,
            max_retries=1,
            backoff_base_ms=100,
        )
        config = TranslatorConfig.from_args(args)
        assert config.api_key == "sk-arg"
        assert config.chunk_size == 5
        assert config.max_retries == 1
        assert config.backoff_base_ms == 100

    def test_validate_ok(self):
        assert TranslatorConfig(api_key="k").validate() is None

    def test_validate_missing_key(self):
        error = TranslatorConfig(api_key="").validate()
        assert "API key" in error

    @pytest.mark.parametrize("changes,fragment", [
        ({"chunk_size": 0}, "Chunk size"),
        ({"max_retries": -1}, "Max retries"),
        ({"backoff_base_ms": -5}, "Backoff"),
        ({"temperature": 3.0}, "Temperature"),
    ])
    def test_validate_ranges(self, changes, fragment):
        error = TranslatorConfig(api_key="k", **changes).validate()
        assert fragment in error
