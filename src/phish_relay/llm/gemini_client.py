"""
Gemini client implementation for LLM inference.

Talks to the Generative Language REST API using httpx AsyncClient:
- JSON response mode via generationConfig.responseMimeType
- Connection pooling through a persistent client
- Model listing for the diagnostic endpoint
"""

import json
import time
from typing import Any, Dict, Optional

import httpx
import structlog

from phish_relay.llm.base_client import BaseLLMClient
from phish_relay.llm.exceptions import (
    LLMConnectionError,
    LLMGenerationError,
    LLMHTTPStatusError,
    LLMTimeoutError,
)
from phish_relay.models.llm_models import LLMGenerationRequest, LLMGenerationResponse
from phish_relay.monitoring.metrics import llm_latency_seconds


logger = structlog.get_logger(__name__)


class GeminiClient(BaseLLMClient):
    """
    Gemini-specific LLM client.

    API Endpoints:
    - POST /{version}/models/{model}:generateContent: Generate content
    - GET /{version}/models: List available models

    The API key is sent as the `key` query parameter.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com",
        api_version: str = "v1beta",
        timeout: int = 60,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Google API key
            base_url: API root URL
            api_version: Path segment for the API version (v1beta, v1)
            timeout: Request timeout in seconds
            connection_limits: httpx pool limits (default: 10 max connections)
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        super().__init__(base_url, timeout, **kwargs)
        self.api_key = api_key
        self.api_version = api_version.strip('/')

        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0
            )

        self._client: Optional[httpx.AsyncClient] = None
        self._connection_limits = connection_limits
        self._transport = transport

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    def _model_path(self, model: str) -> str:
        name = model if model.startswith("models/") else f"models/{model}"
        return f"/{self.api_version}/{name}:generateContent"

    @staticmethod
    def _build_payload(request: LLMGenerationRequest) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "contents": [
                {"role": turn.role, "parts": [{"text": turn.text}]}
                for turn in request.contents
            ]
        }

        generation_config: Dict[str, Any] = {}
        if request.response_mime_type:
            generation_config["responseMimeType"] = request.response_mime_type
        if request.temperature is not None:
            generation_config["temperature"] = request.temperature
        if request.max_output_tokens is not None:
            generation_config["maxOutputTokens"] = request.max_output_tokens
        if generation_config:
            payload["generationConfig"] = generation_config
        return payload

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Single HTTP attempt with transport errors mapped to LLM errors."""
        client = await self._get_client()
        params = dict(kwargs.pop("params", None) or {})
        params["key"] = self.api_key
        try:
            response = await client.request(method, url, params=params, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("Gemini request timeout", path=url, timeout=self.timeout)
            raise LLMTimeoutError(
                f"Request timeout after {self.timeout}s",
                details={"timeout": self.timeout, "error": str(e)}
            ) from e
        except httpx.TransportError as e:
            logger.warning("Gemini network error", path=url, error=str(e))
            raise LLMConnectionError(
                f"Network error: {e}",
                details={"error_type": type(e).__name__}
            ) from e

        if response.is_error:
            logger.error(
                "Gemini HTTP error",
                path=url,
                status_code=response.status_code,
                error_text=response.text,
            )
            raise LLMHTTPStatusError(
                f"Gemini returned HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
        return response

    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        """
        Generate content with the requested model.

        Request:
        {
            "contents": [{"role": "user", "parts": [{"text": "..."}]}, ...],
            "generationConfig": {"responseMimeType": "application/json"}
        }

        Response:
        {
            "candidates": [{"content": {"parts": [{"text": "..."}]}, "finishReason": "STOP"}],
            "usageMetadata": {"promptTokenCount": 50, "candidatesTokenCount": 20, "totalTokenCount": 70},
            "modelVersion": "gemini-1.5-flash-002"
        }
        """
        start_time = time.time()
        payload = self._build_payload(request)

        logger.info(
            "Sending generation request to Gemini",
            model=request.model,
            turns=len(request.contents),
            response_mime_type=request.response_mime_type,
        )

        try:
            response = await self._send("POST", self._model_path(request.model), json=payload)
            try:
                data = response.json()
            except json.JSONDecodeError as e:
                raise LLMGenerationError(
                    "Invalid JSON envelope from Gemini",
                    details={"parse_error": str(e)}
                ) from e
            content, finish_reason = self._extract_text(data)
        except Exception:
            llm_latency_seconds.labels(model=request.model, success="false").observe(
                time.time() - start_time
            )
            raise

        latency_ms = int((time.time() - start_time) * 1000)
        llm_latency_seconds.labels(model=request.model, success="true").observe(latency_ms / 1000.0)

        usage = data.get("usageMetadata") or {}
        logger.info(
            "Gemini generation successful",
            model=request.model,
            latency_ms=latency_ms,
            finish_reason=finish_reason,
            total_tokens=usage.get("totalTokenCount"),
        )

        return LLMGenerationResponse(
            content=content,
            model_version=data.get("modelVersion") or request.model,
            finish_reason=finish_reason,
            prompt_tokens=usage.get("promptTokenCount"),
            completion_tokens=usage.get("candidatesTokenCount"),
            total_tokens=usage.get("totalTokenCount"),
            latency_ms=latency_ms,
            raw_metadata={"prompt_feedback": data.get("promptFeedback")},
        )

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> tuple[str, Optional[str]]:
        """Concatenate the text parts of the first candidate."""
        candidates = data.get("candidates") or []
        if not candidates:
            block_reason = (data.get("promptFeedback") or {}).get("blockReason")
            raise LLMGenerationError(
                "Gemini returned no candidates"
                + (f" (blocked: {block_reason})" if block_reason else ""),
                details={"prompt_feedback": data.get("promptFeedback")}
            )

        first = candidates[0]
        parts = (first.get("content") or {}).get("parts") or []
        texts = [part["text"] for part in parts if isinstance(part.get("text"), str)]
        if not texts:
            raise LLMGenerationError(
                "Gemini candidate has no text parts",
                details={"finish_reason": first.get("finishReason")}
            )
        return "".join(texts), first.get("finishReason")

    async def list_models(self) -> list[Dict[str, Any]]:
        """
        List model descriptors via GET /{version}/models.

        Returns:
            Raw model dicts (name, supportedGenerationMethods, ...)
        """
        response = await self._send("GET", f"/{self.api_version}/models")
        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise LLMGenerationError(
                "Invalid JSON from model listing",
                details={"parse_error": str(e)}
            ) from e
        models = data.get("models") or []
        logger.debug("Listed available models", count=len(models))
        return models

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed Gemini client connection")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
