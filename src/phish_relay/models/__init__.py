"""
Data models for the phishing relay.

- input_models: EmailSummary records and their compact upstream form
- output_models: ClassificationResult / ClassificationResponse
- llm_models: internal request/response models for the LLM client
"""

from phish_relay.models.input_models import EmailSummary, CompactEmail, compact_email, compact_batch
from phish_relay.models.output_models import ClassificationResult, ClassificationResponse
from phish_relay.models.llm_models import ContentTurn, LLMGenerationRequest, LLMGenerationResponse

__all__ = [
    "EmailSummary",
    "CompactEmail",
    "compact_email",
    "compact_batch",
    "ClassificationResult",
    "ClassificationResponse",
    "ContentTurn",
    "LLMGenerationRequest",
    "LLMGenerationResponse",
]
