"""
HTTP routes of the relay.

- GET  /health           constant liveness answer
- GET  /api/models-rest  models usable for generateContent (diagnostic)
- GET  /api/ping-gen     raw text of a trivial generation (diagnostic)
- POST /api/phishing     classify a batch of email summaries
"""

import json

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse, Response

from phish_relay.api.dependencies import get_classifier, get_relay_state
from phish_relay.api.models import PHISHING_REQUEST_SCHEMA, ErrorResponse, ModelListResponse
from phish_relay.llm.exceptions import LLMHTTPStatusError
from phish_relay.models.output_models import ClassificationResponse
from phish_relay.monitoring.metrics import phishing_requests_total
from phish_relay.relay.classifier import PhishingClassifier
from phish_relay.relay.exceptions import (
    InvalidInputError,
    ServiceUnavailableError,
    UpstreamStatusError,
)
from phish_relay.relay.state import RelayState
from phish_relay.validation.exceptions import UpstreamResponseError

logger = structlog.get_logger(__name__)

GENERATE_METHOD = "generateContent"

router = APIRouter()


@router.get("/health", response_class=PlainTextResponse, summary="Liveness check")
async def health() -> str:
    return "OK"


@router.get(
    "/api/models-rest",
    response_model=ModelListResponse,
    summary="List models supporting generateContent",
    responses={
        503: {"model": ErrorResponse, "description": "GOOGLE_API_KEY not set"},
        500: {"model": ErrorResponse, "description": "Unexpected error"},
    },
)
async def list_models(state: RelayState = Depends(get_relay_state)) -> ModelListResponse:
    """
    Pass-through to the model listing API.

    A non-2xx upstream answer is forwarded with its status and body.
    """
    client = state.require_client("GOOGLE_API_KEY not set")
    try:
        models = await client.list_models()
    except LLMHTTPStatusError as e:
        raise UpstreamStatusError("List models failed", e.status_code, e.body) from e

    usable = [
        m.get("name")
        for m in models
        if isinstance(m, dict) and GENERATE_METHOD in (m.get("supportedGenerationMethods") or [])
    ]
    return ModelListResponse(count=len(usable), models=usable)


@router.get(
    "/api/ping-gen",
    summary="Trivial generation with the bound model",
    responses={
        200: {"content": {"application/json": {}}, "description": "Raw model text"},
        503: {"model": ErrorResponse, "description": "Model not initialized"},
        500: {"model": ErrorResponse, "description": "Unexpected error"},
    },
)
async def ping_generation(state: RelayState = Depends(get_relay_state)) -> Response:
    """Run the liveness prompt and return the model text untouched."""
    model = state.require_model("Model not initialized")
    client = state.require_client()
    response = await client.generate(state.prompt_builder.build_probe_request(model))
    return Response(content=response.content, media_type="application/json")


def _outcome_label(exc: Exception) -> str:
    if isinstance(exc, InvalidInputError):
        return "invalid_input"
    if isinstance(exc, ServiceUnavailableError):
        return "unavailable"
    if isinstance(exc, UpstreamResponseError):
        return "upstream_error"
    return "error"


@router.post(
    "/api/phishing",
    response_model=ClassificationResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Classify a batch of emails as phishing or legitimate",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": PHISHING_REQUEST_SCHEMA}},
        }
    },
    responses={
        400: {"model": ErrorResponse, "description": "Body is not { emails: [...] }"},
        502: {"model": ErrorResponse, "description": "Model output not JSON or missing results"},
        503: {"model": ErrorResponse, "description": "No API key or no model bound"},
        500: {"model": ErrorResponse, "description": "Unexpected error"},
    },
)
async def classify_phishing(
    request: Request,
    classifier: PhishingClassifier = Depends(get_classifier),
) -> ClassificationResponse:
    """
    Classify a batch of email summaries.

    The body is read by hand so that a wrong shape yields the relay's own
    400 message instead of FastAPI's validation error. Unparseable JSON is
    rejected before the availability checks; an empty body counts as {}.
    """
    try:
        raw = await request.body()
        try:
            body = json.loads(raw) if raw.strip() else {}
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidInputError("Expected { emails: [...] }") from e

        result = await classifier.classify(body)
    except Exception as exc:
        phishing_requests_total.labels(status=_outcome_label(exc)).inc()
        raise

    phishing_requests_total.labels(status="success").inc()
    return result
