"""
Output data models for the phishing relay.

These are built only from normalized values (see
phish_relay.validation.normalizer), so construction never fails on
model-supplied data.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ClassificationResult(BaseModel):
    """Verdict for a single email."""

    model_config = ConfigDict(populate_by_name=True)

    id: Any = Field(default=None, description="Identifier echoed from the model output")
    is_phishing: bool = Field(default=False, alias="isPhishing", description="Phishing verdict")
    confidence: float = Field(default=0.0, ge=0.0, le=1.0, description="Verdict confidence")
    reasons: list[Any] = Field(
        default_factory=list,
        max_length=8,
        description="Short explanations, model order preserved",
    )


class ClassificationResponse(BaseModel):
    """
    Normalized model answer returned to the client.

    Top-level keys other than `results` are passed through unchanged.
    The result count is whatever the model produced.
    """

    model_config = ConfigDict(extra="allow")

    results: list[ClassificationResult] = Field(default_factory=list)
