"""
Exceptions for model replies the relay cannot interpret.

Both map to 502 Bad Gateway: the caller's request was fine, the upstream
answer was not.
"""

from typing import Any

RAW_EXCERPT_LIMIT = 1000


class UpstreamResponseError(Exception):
    """
    Base exception for uninterpretable model output.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UpstreamFormatError(UpstreamResponseError):
    """
    The model reply is not valid JSON.

    Keeps the full raw text for server-side logging; only the first
    RAW_EXCERPT_LIMIT characters go back to the caller.
    """

    def __init__(self, raw_content: str, parse_error: str | None = None):
        super().__init__(
            "Model returned non-JSON",
            {"parse_error": parse_error} if parse_error else None,
        )
        self.raw_content = raw_content

    @property
    def raw_excerpt(self) -> str:
        return self.raw_content[:RAW_EXCERPT_LIMIT]


class UpstreamSchemaError(UpstreamResponseError):
    """
    The model reply is JSON but has no array-valued `results`.
    """

    def __init__(self, parsed: Any, validation_errors: list[str] | None = None):
        super().__init__(
            "Malformed JSON from model",
            {"validation_errors": validation_errors} if validation_errors else None,
        )
        self.parsed = parsed
