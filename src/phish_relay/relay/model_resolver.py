"""
Startup model resolution.

Probes a preferred model and then an ordered candidate list, one at a
time, and binds the first model whose liveness probe passes. Order is a
priority list, so probes are never run concurrently.
"""

import json
from typing import Iterable, Optional

import structlog

from phish_relay.llm.base_client import BaseLLMClient
from phish_relay.llm.prompt_builder import PromptBuilder
from phish_relay.monitoring.metrics import model_probes_total
from phish_relay.relay.model_handle import ModelHandle

logger = structlog.get_logger(__name__)


class ModelResolver:
    """
    Bind a ModelHandle to the first callable model.

    Each candidate gets exactly one probe; failures are logged and the
    next candidate is tried. If nothing passes, the handle stays unbound.
    """

    def __init__(
        self,
        llm_client: BaseLLMClient,
        prompt_builder: PromptBuilder,
        handle: ModelHandle,
    ):
        self.llm_client = llm_client
        self.prompt_builder = prompt_builder
        self.handle = handle

    async def probe(self, model_name: str) -> bool:
        """
        Liveness probe: ask for {"ok": true} in JSON mode.

        Passes only if the reply parses as a JSON object whose `ok` is
        exactly true. Never raises for upstream failures.
        """
        try:
            response = await self.llm_client.generate(
                self.prompt_builder.build_probe_request(model_name)
            )
            parsed = json.loads(response.content)
            passed = isinstance(parsed, dict) and parsed.get("ok") is True
        except Exception as e:
            logger.debug(
                "Model probe failed",
                model=model_name,
                error_type=type(e).__name__,
                error=str(e),
            )
            passed = False

        model_probes_total.labels(model=model_name, success=str(passed).lower()).inc()
        return passed

    async def resolve(
        self,
        preferred: Optional[str],
        candidates: Iterable[str],
    ) -> Optional[str]:
        """
        Resolve and bind the model to use.

        Args:
            preferred: Explicitly requested model (GEMINI_MODEL), probed first
            candidates: Ordered fallbacks, probed only if preferred fails

        Returns:
            The bound model name, or None when every probe failed
        """
        if self.handle.is_bound:
            return self.handle.model_name

        if preferred:
            if await self.probe(preferred):
                self.handle.bind(preferred)
                logger.info("Using requested model", model=preferred)
                return preferred
            logger.warning("Requested model failed probe, trying candidates", model=preferred)

        for candidate in candidates:
            if await self.probe(candidate):
                self.handle.bind(candidate)
                logger.info("Selected working model", model=candidate)
                return candidate

        logger.error("No candidate models worked. Check API key access and model availability.")
        return None
