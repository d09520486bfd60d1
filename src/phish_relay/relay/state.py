"""
Process-wide relay state.

Created once by the application factory and stored on `app.state.relay`;
request handlers receive it through dependency injection.
"""

from dataclasses import dataclass, field
from typing import Optional

from phish_relay.config import Settings
from phish_relay.llm.base_client import BaseLLMClient
from phish_relay.llm.gemini_client import GeminiClient
from phish_relay.llm.prompt_builder import PromptBuilder
from phish_relay.relay.exceptions import ConfigurationError, ModelUnavailableError
from phish_relay.relay.model_handle import ModelHandle
from phish_relay.relay.model_resolver import ModelResolver


@dataclass
class RelayState:
    """Single owner of the settings, upstream client and model handle."""

    settings: Settings
    llm_client: Optional[BaseLLMClient]
    prompt_builder: PromptBuilder
    handle: ModelHandle = field(default_factory=ModelHandle)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        llm_client: Optional[BaseLLMClient] = None,
        prompt_builder: Optional[PromptBuilder] = None,
    ) -> "RelayState":
        """
        Build the state; a Gemini client is created only when a key is set.

        An injected `llm_client` wins over the settings (tests pass fakes).
        """
        if llm_client is None and settings.GOOGLE_API_KEY:
            llm_client = GeminiClient(
                api_key=settings.GOOGLE_API_KEY,
                base_url=settings.GEMINI_BASE_URL,
                api_version=settings.GEMINI_API_VERSION,
                timeout=settings.GEMINI_TIMEOUT,
            )
        return cls(
            settings=settings,
            llm_client=llm_client,
            prompt_builder=prompt_builder or PromptBuilder(),
        )

    @property
    def model_in_use(self) -> Optional[str]:
        return self.handle.model_name

    def require_client(self, message: str = "GOOGLE_API_KEY not set on server") -> BaseLLMClient:
        """
        Raises:
            ConfigurationError: If no API key (and so no client) is configured
        """
        if not self.settings.GOOGLE_API_KEY or self.llm_client is None:
            raise ConfigurationError(message)
        return self.llm_client

    def require_model(self, message: str = "Model not initialized yet. Try again in a moment.") -> str:
        """
        Raises:
            ModelUnavailableError: If no model is bound
        """
        if not self.handle.is_bound:
            raise ModelUnavailableError(message)
        return self.handle.model_name

    def resolver(self) -> ModelResolver:
        return ModelResolver(self.require_client(), self.prompt_builder, self.handle)

    async def resolve_model(self) -> Optional[str]:
        """Startup resolution; a no-op without an API key."""
        if self.llm_client is None or not self.settings.GOOGLE_API_KEY:
            return None
        return await self.resolver().resolve(
            self.settings.GEMINI_MODEL,
            self.settings.CANDIDATE_MODELS,
        )
