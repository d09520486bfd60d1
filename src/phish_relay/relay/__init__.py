"""
Relay operations: model resolution and batch classification.
"""

from phish_relay.relay.classifier import PhishingClassifier, extract_emails
from phish_relay.relay.exceptions import (
    ConfigurationError,
    InvalidInputError,
    ModelUnavailableError,
    RelayError,
    RequestTooLargeError,
    ServiceUnavailableError,
    UpstreamStatusError,
)
from phish_relay.relay.model_handle import HandleState, ModelHandle
from phish_relay.relay.model_resolver import ModelResolver
from phish_relay.relay.state import RelayState

__all__ = [
    "PhishingClassifier",
    "extract_emails",
    "ConfigurationError",
    "InvalidInputError",
    "ModelUnavailableError",
    "RelayError",
    "RequestTooLargeError",
    "ServiceUnavailableError",
    "UpstreamStatusError",
    "HandleState",
    "ModelHandle",
    "ModelResolver",
    "RelayState",
]
