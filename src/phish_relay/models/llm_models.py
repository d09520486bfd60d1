"""
LLM-specific data models for the request/response cycle.

Internal to the LLM layer; they mirror the generateContent payload of the
Generative Language API closely enough to be converted 1:1.
"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ContentTurn(BaseModel):
    """One conversational turn made of text parts."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"] = "user"
    text: str = Field(..., description="Turn text (sent as a single part)")


class LLMGenerationRequest(BaseModel):
    """
    Standardized generation request handed to an LLM client.
    """

    model_config = ConfigDict(frozen=True)

    model: str = Field(..., description="Model identifier (e.g., 'gemini-1.5-flash')")
    contents: list[ContentTurn] = Field(..., min_length=1, description="Ordered turns")
    response_mime_type: Optional[str] = Field(
        default="application/json",
        description="Output constraint; JSON mode by default",
    )
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_output_tokens: Optional[int] = Field(default=None, ge=1)


class LLMGenerationResponse(BaseModel):
    """
    Raw generated text plus metadata for logging.

    Interpretation of `content` happens in the validation layer.
    """

    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Generated text (expected to be JSON)")
    model_version: str = Field(..., description="Model that produced the text")
    finish_reason: Optional[str] = Field(default=None, description="STOP, MAX_TOKENS, SAFETY, ...")
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    latency_ms: int = Field(..., ge=0)
    raw_metadata: Dict[str, Any] = Field(default_factory=dict)
