"""
Abstract base client for LLM inference.

Keeps the relay independent of the concrete provider: the resolver and the
classifier only see generate() and list_models().
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

import structlog

from phish_relay.models.llm_models import LLMGenerationRequest, LLMGenerationResponse


logger = structlog.get_logger(__name__)


class BaseLLMClient(ABC):
    """
    Abstract base class for LLM inference clients.

    Responsibilities:
    - Send generation requests to the provider
    - Return the generated text in a standardized response
    - Translate transport/HTTP failures into LLMClientError subclasses

    Does NOT handle:
    - Prompt construction (PromptBuilder)
    - Interpreting the generated JSON (validation package)
    - Retries; every call is a single attempt
    """

    def __init__(self, base_url: str, timeout: int = 60, **kwargs):
        """
        Initialize base client.

        Args:
            base_url: Root URL of the provider API
            timeout: Request timeout in seconds
            **kwargs: Additional provider-specific config
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.extra_config = kwargs

        logger.info(
            "Initialized LLM client",
            client_class=self.__class__.__name__,
            base_url=self.base_url,
            timeout=timeout,
        )

    @abstractmethod
    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        """
        Generate a completion.

        Raises:
            LLMConnectionError: Network errors
            LLMTimeoutError: Request exceeded timeout
            LLMHTTPStatusError: Non-2xx answer
            LLMGenerationError: 2xx answer without text
        """
        pass

    @abstractmethod
    async def list_models(self) -> list[Dict[str, Any]]:
        """
        List model descriptors known to the provider.

        Raises:
            LLMHTTPStatusError: Non-2xx answer (status and body preserved)
            LLMConnectionError: Unable to reach the provider
        """
        pass

    async def close(self):
        """Close client connections. Default implementation does nothing."""
        logger.debug("Closing LLM client", client_class=self.__class__.__name__)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s)"
        )
