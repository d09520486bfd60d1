"""
LLM client abstraction and implementations.

Components:
- BaseLLMClient: Abstract base class for LLM clients
- GeminiClient: Generative Language REST API implementation
- PromptBuilder: Builds classification and probe requests
- exceptions: LLM-specific exceptions
"""

from phish_relay.llm.base_client import BaseLLMClient
from phish_relay.llm.gemini_client import GeminiClient
from phish_relay.llm.prompt_builder import PromptBuilder
from phish_relay.llm.exceptions import (
    LLMClientError,
    LLMConnectionError,
    LLMGenerationError,
    LLMHTTPStatusError,
    LLMTimeoutError,
)

__all__ = [
    "BaseLLMClient",
    "GeminiClient",
    "PromptBuilder",
    "LLMClientError",
    "LLMConnectionError",
    "LLMGenerationError",
    "LLMHTTPStatusError",
    "LLMTimeoutError",
]
