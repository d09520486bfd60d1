"""
Normalization of model-produced classification results.

Every field has a documented default, and coercion never raises. One
malformed element never fails the batch.

    id          -> echoed as-is (None when missing)
    isPhishing  -> truthiness of the value (False when missing)
    confidence  -> number clamped to [0, 1]; 0 when missing/non-finite/non-numeric.
                   Strings may be decimal or 0x/0o/0b; one-element lists unwrap.
    reasons     -> first MAX_REASONS items of a list; [] otherwise
"""

import math
from typing import Any

from phish_relay.models.output_models import ClassificationResponse, ClassificationResult

MAX_REASONS = 8

_RADIX_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}


def _parse_numeric_text(value: str) -> float:
    text = value.strip()
    if not text:
        return 0.0
    # float() and int() accept digit separators
    if "_" in text:
        return math.nan
    radix = _RADIX_PREFIXES.get(text[:2].lower())
    if radix is not None:
        digits = text[2:]
        if not digits.isalnum():
            return math.nan
        try:
            return float(int(digits, radix))
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf
    try:
        return float(text)
    except ValueError:
        return math.nan


def _to_number(value: Any) -> float:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.inf
    if isinstance(value, str):
        return _parse_numeric_text(value)
    if isinstance(value, list):
        # Lists are read through their string form: [] and [null] are 0,
        # [x] is x, [true] and longer lists are not numbers
        if len(value) > 1:
            return math.nan
        if not value or value[0] is None:
            return 0.0
        if isinstance(value[0], bool):
            return math.nan
        return _to_number(value[0])
    return math.nan


def clamp_confidence(value: Any) -> float:
    """Clamp to [0, 1]; non-finite or non-numeric input gives 0."""
    number = _to_number(value)
    if not math.isfinite(number):
        return 0.0
    return max(0.0, min(1.0, number))


def is_truthy(value: Any) -> bool:
    """
    Boolean coercion of a JSON value.

    None, False, 0, NaN and "" are false. Everything else is true,
    including empty arrays and objects.
    """
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


def normalize_reasons(value: Any, limit: int = MAX_REASONS) -> list[Any]:
    """Truncate a list of reasons; anything that is not a list becomes []."""
    if not isinstance(value, list):
        return []
    return value[:limit]


def normalize_result(item: Any) -> ClassificationResult:
    """Coerce one `results` element; non-objects normalize to the defaults."""
    record = item if isinstance(item, dict) else {}
    return ClassificationResult(
        id=record.get("id"),
        is_phishing=is_truthy(record.get("isPhishing")),
        confidence=clamp_confidence(record.get("confidence")),
        reasons=normalize_reasons(record.get("reasons")),
    )


def normalize_response(parsed: dict) -> ClassificationResponse:
    """
    Normalize every element of `results`, keeping other top-level keys.

    `parsed` must already have passed require_results_envelope().
    """
    extras = {key: value for key, value in parsed.items() if key != "results"}
    return ClassificationResponse(
        results=[normalize_result(item) for item in parsed["results"]],
        **extras,
    )
