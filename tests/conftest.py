"""Shared test fixtures for unit and integration tests."""

import pytest
from unittest.mock import AsyncMock

from phish_relay.config import Settings
from phish_relay.llm.base_client import BaseLLMClient
from phish_relay.models.llm_models import LLMGenerationResponse


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a fake key and metrics disabled.

    Override in individual tests with model_copy(update={...}).
    """
    return Settings(
        APP_NAME="Phish Relay (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        GOOGLE_API_KEY="test-key",
        GEMINI_MODEL=None,
        CANDIDATE_MODELS=["gemini-a", "gemini-b", "gemini-c"],
        GEMINI_BASE_URL="https://gemini.test",
        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def make_llm_response():
    """Factory fixture for LLMGenerationResponse with custom content.

    Usage:
        def test_something(make_llm_response):
            response = make_llm_response('{"results": []}')
    """
    def _create(content: str, model: str = "gemini-a") -> LLMGenerationResponse:
        return LLMGenerationResponse(
            content=content,
            model_version=model,
            finish_reason="STOP",
            latency_ms=12,
        )

    return _create


@pytest.fixture
def mock_llm_client(make_llm_response):
    """AsyncMock standing in for the Gemini client.

    generate() answers '{"results": []}' unless a test overrides it.
    """
    mock = AsyncMock(spec=BaseLLMClient)
    mock.generate = AsyncMock(return_value=make_llm_response('{"results": []}'))
    mock.list_models = AsyncMock(return_value=[])
    mock.close = AsyncMock()
    return mock
