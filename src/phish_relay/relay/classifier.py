"""
Classify-batch operation.

One upstream call per request, no retries. The model's answer is trusted
after light coercion: result count and ids are not reconciled with the
input batch.
"""

from typing import Any

import structlog

from phish_relay.models.output_models import ClassificationResponse
from phish_relay.relay.exceptions import InvalidInputError
from phish_relay.relay.state import RelayState
from phish_relay.validation.normalizer import normalize_response
from phish_relay.validation.response_parser import parse_model_output

logger = structlog.get_logger(__name__)

EMAILS_FIELD = "emails"


def extract_emails(body: Any) -> list[Any]:
    """
    Pull the batch out of the request body.

    Raises:
        InvalidInputError: If the body is not an object or `emails` is not a list
    """
    emails = body.get(EMAILS_FIELD) if isinstance(body, dict) else None
    if not isinstance(emails, list):
        raise InvalidInputError("Expected { emails: [...] }")
    return emails


class PhishingClassifier:
    """Relay a batch of email summaries to the bound model."""

    def __init__(self, state: RelayState):
        self.state = state

    def check_available(self) -> None:
        """
        Raises:
            ConfigurationError: No API key
            ModelUnavailableError: No model bound
        """
        self.state.require_client()
        self.state.require_model()

    async def classify(self, body: Any) -> ClassificationResponse:
        """
        Classify a request body of the form {"emails": [...]}.

        Raises:
            ConfigurationError / ModelUnavailableError: Relay not ready (503)
            InvalidInputError: Body shape is wrong (400)
            UpstreamFormatError / UpstreamSchemaError: Model reply unusable (502)
            LLMClientError: Upstream call failed (500)
        """
        self.check_available()
        emails = extract_emails(body)

        model = self.state.require_model()
        request = self.state.prompt_builder.build_classification_request(model, emails)

        logger.info("Classifying batch", model=model, email_count=len(emails))
        response = await self.state.require_client().generate(request)

        parsed = parse_model_output(response.content)
        result = normalize_response(parsed)

        logger.info(
            "Batch classified",
            model=model,
            email_count=len(emails),
            result_count=len(result.results),
            latency_ms=response.latency_ms,
        )
        return result
