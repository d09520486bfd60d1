"""
Unit tests for GeminiClient against httpx.MockTransport (no network).
"""

import json

import httpx
import pytest

from phish_relay.llm.exceptions import (
    LLMConnectionError,
    LLMGenerationError,
    LLMHTTPStatusError,
    LLMTimeoutError,
)
from phish_relay.llm.gemini_client import GeminiClient
from phish_relay.models.llm_models import ContentTurn, LLMGenerationRequest


def _client(handler) -> GeminiClient:
    return GeminiClient(
        api_key="secret-key",
        base_url="https://gemini.test",
        transport=httpx.MockTransport(handler),
    )


def _request(model: str = "gemini-a") -> LLMGenerationRequest:
    return LLMGenerationRequest(
        model=model,
        contents=[ContentTurn(text="instructions"), ContentTurn(text='{"emails": []}')],
    )


def _candidate_reply(*texts: str, finish_reason: str = "STOP") -> dict:
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": t} for t in texts]},
                "finishReason": finish_reason,
            }
        ],
        "usageMetadata": {"promptTokenCount": 10, "candidatesTokenCount": 5, "totalTokenCount": 15},
        "modelVersion": "gemini-a-002",
    }


@pytest.mark.asyncio
async def test_generate_sends_contents_and_json_mode():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_candidate_reply('{"results": []}'))

    async with _client(handler) as client:
        response = await client.generate(_request())

    assert seen["url"].path == "/v1beta/models/gemini-a:generateContent"
    assert seen["url"].params["key"] == "secret-key"
    assert seen["body"] == {
        "contents": [
            {"role": "user", "parts": [{"text": "instructions"}]},
            {"role": "user", "parts": [{"text": '{"emails": []}'}]},
        ],
        "generationConfig": {"responseMimeType": "application/json"},
    }
    assert response.content == '{"results": []}'
    assert response.model_version == "gemini-a-002"
    assert response.finish_reason == "STOP"
    assert response.total_tokens == 15


@pytest.mark.asyncio
async def test_generate_accepts_prefixed_model_names():
    paths = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(200, json=_candidate_reply("{}"))

    async with _client(handler) as client:
        await client.generate(_request("models/gemini-pro"))

    assert paths == ["/v1beta/models/gemini-pro:generateContent"]


@pytest.mark.asyncio
async def test_generate_concatenates_text_parts():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_candidate_reply('{"results"', ": []}"))

    async with _client(handler) as client:
        response = await client.generate(_request())

    assert response.content == '{"results": []}'


@pytest.mark.asyncio
async def test_generate_http_error_keeps_status_and_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text='{"error": {"message": "model not found"}}')

    async with _client(handler) as client:
        with pytest.raises(LLMHTTPStatusError) as exc_info:
            await client.generate(_request())

    assert exc_info.value.status_code == 404
    assert "model not found" in exc_info.value.body


@pytest.mark.asyncio
async def test_generate_blocked_prompt_raises_generation_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}})

    async with _client(handler) as client:
        with pytest.raises(LLMGenerationError) as exc_info:
            await client.generate(_request())

    assert "SAFETY" in str(exc_info.value)


@pytest.mark.asyncio
async def test_generate_candidate_without_text_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"candidates": [{"finishReason": "MAX_TOKENS"}]})

    async with _client(handler) as client:
        with pytest.raises(LLMGenerationError):
            await client.generate(_request())


@pytest.mark.asyncio
async def test_network_error_maps_to_connection_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(LLMConnectionError):
            await client.generate(_request())


@pytest.mark.asyncio
async def test_timeout_maps_to_timeout_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    async with _client(handler) as client:
        with pytest.raises(LLMTimeoutError):
            await client.generate(_request())


@pytest.mark.asyncio
async def test_list_models_returns_descriptors():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(
            200,
            json={
                "models": [
                    {"name": "models/gemini-a", "supportedGenerationMethods": ["generateContent"]},
                    {"name": "models/embedding-001", "supportedGenerationMethods": ["embedContent"]},
                ]
            },
        )

    async with _client(handler) as client:
        models = await client.list_models()

    assert seen["url"].path == "/v1beta/models"
    assert seen["url"].params["key"] == "secret-key"
    assert [m["name"] for m in models] == ["models/gemini-a", "models/embedding-001"]


@pytest.mark.asyncio
async def test_list_models_http_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, text="API key not valid")

    async with _client(handler) as client:
        with pytest.raises(LLMHTTPStatusError) as exc_info:
            await client.list_models()

    assert exc_info.value.status_code == 403
    assert exc_info.value.body == "API key not valid"
