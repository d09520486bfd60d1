"""
API-specific request and response models for FastAPI endpoints.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from phish_relay.models.input_models import EmailSummary


# Documented shape of POST /api/phishing; the body itself is checked by extract_emails
PHISHING_REQUEST_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["emails"],
    "properties": {
        "emails": {
            "type": "array",
            "description": "Batch of email summaries",
            "items": EmailSummary.model_json_schema(by_alias=True),
        }
    },
}


class ModelListResponse(BaseModel):
    """Response for GET /api/models-rest."""

    count: int = Field(description="Number of models supporting generateContent", ge=0)
    models: list[Optional[str]] = Field(
        description="Model resource names (null when the upstream entry has none)",
        examples=[["models/gemini-1.5-flash", "models/gemini-1.5-pro"]],
    )


class ServiceInfoResponse(BaseModel):
    """Response for the root endpoint."""

    service: str
    version: str
    model_in_use: Optional[str] = Field(default=None, description="Bound model, if any")
    docs: str = "/docs"
    health: str = "/health"
    metrics: Optional[str] = None


class ErrorResponse(BaseModel):
    """Standard error response format; extra diagnostic keys depend on the error."""

    error: str = Field(
        description="Error message",
        examples=["Expected { emails: [...] }", "Model returned non-JSON"],
    )
    details: Optional[str] = Field(default=None, description="Exception message for 500s")
    raw: Optional[str] = Field(default=None, description="Raw model text excerpt (502, non-JSON)")
    parsed: Optional[Any] = Field(default=None, description="Parsed model output (502, missing results)")
    body: Optional[str] = Field(default=None, description="Upstream body (forwarded status)")
