"""
Input data models for the phishing relay.

Client applications send loosely-shaped email summaries. Nothing here
rejects a record: every field has a default, and the compact form sent
upstream is always produced.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EmailSummary(BaseModel):
    """
    One email as summarized by the client application.

    All fields are optional and untyped on purpose: values are forwarded
    to the model as the client sent them, only null/missing strings are
    replaced by "".
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Any = Field(default=None, description="Opaque caller-supplied identifier (echoed, not validated)")
    sender: Any = Field(default=None, description="Sender display name")
    sender_email: Any = Field(default=None, alias="senderEmail", description="Sender address")
    subject: Any = Field(default=None, description="Subject line")
    snippet: Any = Field(default=None, description="Body excerpt")


class CompactEmail(BaseModel):
    """Record shape sent to the model; `body` carries the snippet."""

    model_config = ConfigDict(populate_by_name=True)

    id: Any = None
    sender: Any = ""
    sender_email: Any = Field(default="", alias="senderEmail")
    subject: Any = ""
    body: Any = ""


def _or_empty(value: Any) -> Any:
    return "" if value is None else value


def compact_email(item: Any) -> CompactEmail:
    """
    Map one request record to its compact upstream form.

    Defaults:
        id          -> None (passed through as-is otherwise)
        sender      -> ""
        senderEmail -> ""
        subject     -> ""
        body        -> "" (from snippet)

    A record that is not a JSON object is treated as an empty one.
    """
    summary = EmailSummary.model_validate(item if isinstance(item, dict) else {})
    return CompactEmail(
        id=summary.id,
        sender=_or_empty(summary.sender),
        sender_email=_or_empty(summary.sender_email),
        subject=_or_empty(summary.subject),
        body=_or_empty(summary.snippet),
    )


def compact_batch(emails: list[Any]) -> list[dict[str, Any]]:
    """Compact a whole batch into JSON-ready dicts (camelCase keys)."""
    return [compact_email(item).model_dump(by_alias=True) for item in emails]
