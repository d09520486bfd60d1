"""
Parsing of raw model output.

Two hard-fail stages:
1. JSON parse (UpstreamFormatError)
2. Envelope schema: an object with an array `results` (UpstreamSchemaError)
"""

import json
from typing import Any

import structlog
from jsonschema import Draft7Validator

from phish_relay.monitoring.metrics import upstream_response_errors_total
from .exceptions import UpstreamFormatError, UpstreamSchemaError

logger = structlog.get_logger(__name__)

RESULTS_ENVELOPE_SCHEMA = {
    "type": "object",
    "required": ["results"],
    "properties": {
        "results": {"type": "array"},
    },
}

_envelope_validator = Draft7Validator(RESULTS_ENVELOPE_SCHEMA)


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are not JSON and cannot be echoed back to the client
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_json_text(content: str) -> Any:
    """
    Parse the model's raw text.

    Raises:
        UpstreamFormatError: If content is not valid JSON
    """
    try:
        return json.loads(content, parse_constant=_reject_constant)
    except ValueError as e:
        upstream_response_errors_total.labels(error_type="non_json").inc()
        logger.error("Model output JSON parse failed", parse_error=str(e), raw=content)
        raise UpstreamFormatError(content, parse_error=str(e)) from e


def require_results_envelope(parsed: Any) -> dict:
    """
    Check that parsed output is an object with an array-valued `results`.

    Raises:
        UpstreamSchemaError: On any envelope violation (parsed value attached)
    """
    errors = [error.message for error in _envelope_validator.iter_errors(parsed)]
    if errors:
        upstream_response_errors_total.labels(error_type="missing_results").inc()
        logger.error("Malformed JSON from model", parsed=parsed, validation_errors=errors)
        raise UpstreamSchemaError(parsed, validation_errors=errors)
    return parsed


def parse_model_output(content: str) -> dict:
    """Run both stages and return the envelope object."""
    return require_results_envelope(parse_json_text(content))
