"""
Unit tests for request record compaction.
"""

from phish_relay.models.input_models import EmailSummary, compact_batch, compact_email


class TestCompactEmail:
    """Defaults applied when mapping request records."""

    def test_full_record(self):
        record = {
            "id": "m-1",
            "sender": "PayPal",
            "senderEmail": "service@paypa1.com",
            "subject": "Account locked",
            "snippet": "Verify your account now",
        }
        compact = compact_email(record).model_dump(by_alias=True)

        assert compact == {
            "id": "m-1",
            "sender": "PayPal",
            "senderEmail": "service@paypa1.com",
            "subject": "Account locked",
            "body": "Verify your account now",
        }

    def test_missing_fields_default_to_empty_string(self):
        compact = compact_email({"id": 7}).model_dump(by_alias=True)

        assert compact == {"id": 7, "sender": "", "senderEmail": "", "subject": "", "body": ""}

    def test_null_fields_default_to_empty_string(self):
        compact = compact_email(
            {"id": None, "sender": None, "senderEmail": None, "subject": None, "snippet": None}
        )

        assert compact.id is None
        assert compact.sender == ""
        assert compact.sender_email == ""
        assert compact.body == ""

    def test_missing_id_passes_through_as_none(self):
        assert compact_email({"subject": "hi"}).id is None

    def test_non_string_values_are_forwarded(self):
        compact = compact_email({"id": {"uid": 1}, "sender": 42})

        assert compact.id == {"uid": 1}
        assert compact.sender == 42

    def test_non_object_item_becomes_empty_record(self):
        compact = compact_email("not an object").model_dump(by_alias=True)

        assert compact == {"id": None, "sender": "", "senderEmail": "", "subject": "", "body": ""}

    def test_unknown_fields_are_dropped(self):
        compact = compact_email({"id": 1, "attachments": ["a.pdf"]}).model_dump(by_alias=True)

        assert "attachments" not in compact


def test_email_summary_accepts_camel_case():
    summary = EmailSummary.model_validate({"senderEmail": "a@b.c"})
    assert summary.sender_email == "a@b.c"


def test_compact_batch_preserves_order_and_duplicates():
    batch = compact_batch([{"id": 2}, {"id": 1}, {"id": 2}])

    assert [item["id"] for item in batch] == [2, 1, 2]
    assert all("senderEmail" in item for item in batch)
