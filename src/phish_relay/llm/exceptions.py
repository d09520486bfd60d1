"""
Custom exceptions for the LLM client layer.

They let the relay distinguish transport failures from upstream HTTP
errors. The route layer decides which of them are forwarded to the caller
and which become a plain 500.
"""


class LLMClientError(Exception):
    """
    Base exception for all LLM client errors.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class LLMConnectionError(LLMClientError):
    """
    Raised when the Generative Language API cannot be reached.

    Includes DNS failures, refused connections and dropped sockets.
    """
    pass


class LLMTimeoutError(LLMConnectionError):
    """
    Raised when a request exceeds GEMINI_TIMEOUT.
    """
    pass


class LLMHTTPStatusError(LLMClientError):
    """
    Raised when the API answers with a non-2xx status.

    Keeps the upstream status and raw body so diagnostic routes can
    forward them unchanged.
    """
    def __init__(self, message: str, status_code: int, body: str, details: dict | None = None):
        super().__init__(message, details)
        self.status_code = status_code
        self.body = body


class LLMGenerationError(LLMClientError):
    """
    Raised when a 2xx generation reply carries no usable text.

    Examples:
    - prompt blocked by safety filters
    - no candidates returned
    - reply body is not JSON
    """
    pass
