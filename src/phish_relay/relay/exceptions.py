"""
Request-level exceptions raised by the relay operations.

Mapped to HTTP responses by phish_relay.api.error_handlers.
"""


class RelayError(Exception):
    """Base exception for relay request failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ServiceUnavailableError(RelayError):
    """The relay cannot serve the request right now (503)."""
    pass


class ConfigurationError(ServiceUnavailableError):
    """GOOGLE_API_KEY is not configured."""
    pass


class ModelUnavailableError(ServiceUnavailableError):
    """No model has passed a liveness probe (yet)."""
    pass


class InvalidInputError(RelayError):
    """The caller's body does not have the expected shape (400)."""
    pass


class RequestTooLargeError(RelayError):
    """The request body exceeds MAX_BODY_BYTES (413)."""
    pass


class UpstreamStatusError(RelayError):
    """
    A diagnostic upstream call failed with an HTTP status.

    The status and raw body are forwarded to the caller unchanged.
    """

    def __init__(self, message: str, status_code: int, body: str):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
