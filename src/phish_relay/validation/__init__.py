"""
Interpretation of model output.

- response_parser: JSON parse + `results` envelope check (hard fail, 502)
- normalizer: per-element coercion (never fails)
"""

from .exceptions import UpstreamFormatError, UpstreamResponseError, UpstreamSchemaError
from .normalizer import clamp_confidence, is_truthy, normalize_reasons, normalize_response, normalize_result
from .response_parser import parse_json_text, parse_model_output, require_results_envelope

__all__ = [
    "UpstreamFormatError",
    "UpstreamResponseError",
    "UpstreamSchemaError",
    "clamp_confidence",
    "is_truthy",
    "normalize_reasons",
    "normalize_response",
    "normalize_result",
    "parse_json_text",
    "parse_model_output",
    "require_results_envelope",
]
