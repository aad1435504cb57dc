"""Unit tests for DraftParser."""

import base64
from datetime import datetime

import pytest

from swipe_triage.core.draft_parser import (
    DraftParser,
    DraftRecord,
    decode_body_data,
    format_body,
)


def b64(text: str) -> str:
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii")


class TestDraftParser:

    def test_parse_basic(self, sample_draft):
        """Test flattening a full draft."""
        record = DraftParser().parse(sample_draft)

        assert isinstance(record, DraftRecord)
        assert record.id == "draft1"
        assert record.message_id == "msg1"
        assert record.to == "a@b.com"
        assert record.sender == "Me <me@example.com>"
        assert record.subject == "Hi"
        assert record.body == "<p>Hello</p>"
        assert record.snippet == "Hello"
        assert record.date == "Wed, 15 Nov 2023 10:30:00 +0000"

    def test_headers_are_case_insensitive(self):
        headers = [
            {"name": "to", "value": "x@y.com"},
            {"name": "SUBJECT", "value": "Loud"},
        ]
        parser = DraftParser()

        assert parser.get_header(headers, "To") == "x@y.com"
        assert parser.get_header(headers, "Subject") == "Loud"
        assert parser.get_header(headers, "Date") == ""

    def test_missing_message_fields_default_to_empty(self):
        record = DraftParser().parse({"id": "d1", "message": {"id": "m1"}})

        assert record.to == ""
        assert record.subject == ""
        assert record.body == ""
        assert record.snippet == ""

    def test_body_prefers_top_level_data(self):
        payload = {
            "body": {"data": b64("top level")},
            "parts": [{"mimeType": "text/plain", "body": {"data": b64("plain part")}}],
        }
        assert DraftParser().extract_body(payload) == "top level"

    def test_body_uses_first_plain_part(self):
        payload = {
            "body": {"size": 0},
            "parts": [
                {"mimeType": "text/html", "body": {"data": b64("<b>html</b>")}},
                {"mimeType": "text/plain", "body": {"data": b64("first plain")}},
                {"mimeType": "text/plain", "body": {"data": b64("second plain")}},
            ],
        }
        assert DraftParser().extract_body(payload) == "first plain"

    def test_body_falls_back_to_html_part(self):
        payload = {
            "parts": [
                {"mimeType": "application/pdf", "body": {"attachmentId": "att1"}},
                {"mimeType": "text/html", "body": {"data": b64("<p>Hi there</p>")}},
            ],
        }
        assert DraftParser().extract_body(payload) == "<p>Hi there</p>"

    def test_body_empty_plain_part_skips_html(self):
        payload = {
            "parts": [
                {"mimeType": "text/plain", "body": {"size": 0}},
                {"mimeType": "text/html", "body": {"data": b64("<p>ignored</p>")}},
            ],
        }
        assert DraftParser().extract_body(payload) == ""

    def test_body_empty_without_sources(self):
        payload = {"parts": [{"mimeType": "multipart/alternative", "parts": []}]}
        assert DraftParser().extract_body(payload) == ""

    def test_body_decodes_unicode(self):
        payload = {"body": {"data": b64("Grüße ✉️")}}
        assert DraftParser().extract_body(payload) == "Grüße ✉️"

    def test_parsed_date(self, sample_draft_record):
        assert isinstance(sample_draft_record.parsed_date, datetime)

        sample_draft_record.date = ""
        assert sample_draft_record.parsed_date is None


class TestDecodeBodyData:

    def test_unpadded_urlsafe(self):
        encoded = b64("Hello?>").rstrip("=")
        assert decode_body_data(encoded) == "Hello?>"

    def test_standard_alphabet(self):
        encoded = base64.b64encode("subjects?>>".encode()).decode()
        assert decode_body_data(encoded) == "subjects?>>"

    def test_garbage_yields_empty(self):
        assert decode_body_data("a") == ""


class TestFormatBody:

    def test_strips_markup(self):
        assert format_body("<p>Hello <b>world</b></p>") == "Hello world"

    def test_short_text_untouched(self):
        assert format_body("x" * 500) == "x" * 500

    def test_truncates_with_ellipsis(self):
        result = format_body("<div>" + "y" * 600 + "</div>")

        assert result == "y" * 500 + "..."
        assert len(result) == 503

    @pytest.mark.parametrize("limit", [10, 50])
    def test_custom_limit(self, limit):
        assert format_body("z" * 100, limit) == "z" * limit + "..."


class TestDraftRecordSerialization:

    def test_to_dict_uses_gateway_keys(self, sample_draft_record):
        data = sample_draft_record.to_dict()

        assert data == {
            "id": "draft1",
            "messageId": "msg1",
            "to": "a@b.com",
            "from": "Me <me@example.com>",
            "subject": "Hi",
            "body": "<p>Hello</p>",
            "snippet": "Hello",
            "date": "Wed, 15 Nov 2023 10:30:00 +0000",
        }

    def test_from_dict_tolerates_missing_fields(self):
        record = DraftRecord.from_dict({"id": "d9", "messageId": None})

        assert record.id == "d9"
        assert record.message_id == ""
        assert record.body == ""
