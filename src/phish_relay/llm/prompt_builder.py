"""
Prompt builder for LLM requests.

Responsible for:
- Rendering the fixed classification instructions (Jinja2 template)
- Serializing the compacted email batch as the second turn
- Building the trivial liveness-probe request
"""

import json
from pathlib import Path
from typing import Any, Optional

import structlog
from jinja2 import Environment, FileSystemLoader

from phish_relay.models.input_models import compact_batch
from phish_relay.models.llm_models import ContentTurn, LLMGenerationRequest


logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "prompts"
SYSTEM_TEMPLATE_NAME = "phishing_system.txt"

PROBE_PROMPT = 'Return {"ok":true} exactly.'

PHISHING_INDICATORS = [
    "credential theft",
    "payment scams",
    "spoofed brands/domains",
    "urgency/threats",
    "odd links/attachments",
    "mismatched sender name vs address",
    "typosquatting",
    "requests to bypass official channels",
]


class PromptBuilder:
    """
    Build generation requests for the relay.

    The system instructions are rendered once at construction; every batch
    request reuses the same text.
    """

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        indicators: Optional[list[str]] = None,
    ):
        """
        Initialize prompt builder.

        Args:
            templates_dir: Directory holding phishing_system.txt
            indicators: Phishing indicators listed in the instructions
        """
        self.templates_dir = Path(templates_dir or DEFAULT_TEMPLATES_DIR)
        self.indicators = list(indicators or PHISHING_INDICATORS)

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False  # Prompts, not HTML
        )

        try:
            template = self.jinja_env.get_template(SYSTEM_TEMPLATE_NAME)
        except Exception as e:
            logger.error("Failed to load prompt template", error=str(e), templates_dir=str(self.templates_dir))
            raise

        self.system_instructions = template.render(indicators=self.indicators).strip()
        logger.info("PromptBuilder initialized", templates_dir=str(self.templates_dir))

    def build_user_payload(self, emails: list[Any]) -> str:
        """Serialize the compacted batch as `{"emails": [...]}`."""
        return json.dumps({"emails": compact_batch(emails)}, ensure_ascii=False)

    def build_classification_request(self, model: str, emails: list[Any]) -> LLMGenerationRequest:
        """
        Two user turns: the instructions, then the serialized batch.

        Args:
            model: Bound model identifier
            emails: Raw records from the request body (already known to be a list)
        """
        return LLMGenerationRequest(
            model=model,
            contents=[
                ContentTurn(role="user", text=self.system_instructions),
                ContentTurn(role="user", text=self.build_user_payload(emails)),
            ],
            response_mime_type="application/json",
        )

    def build_probe_request(self, model: str) -> LLMGenerationRequest:
        """Minimal JSON-mode request used for liveness checks."""
        return LLMGenerationRequest(
            model=model,
            contents=[ContentTurn(role="user", text=PROBE_PROMPT)],
            response_mime_type="application/json",
        )
