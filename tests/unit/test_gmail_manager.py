"""Unit tests for GmailManager."""

import threading
from unittest.mock import MagicMock, Mock

import pytest
from googleapiclient.errors import HttpError

from swipe_triage.core.gmail_manager import GmailManager


def http_error(status: int) -> HttpError:
    resp = MagicMock()
    resp.status = status
    return HttpError(resp=resp, content=b"error")


class TestGmailManager:

    @pytest.fixture
    def manager(self, mock_gmail_service, test_settings):
        return GmailManager(mock_gmail_service, settings=test_settings)

    def test_find_label_id_case_insensitive(self, manager, mock_gmail_service):
        mock_gmail_service.users().labels().list().execute.return_value = {
            "labels": [{"id": "Label_7", "name": "REVIEW"}]
        }

        assert manager.find_label_id("review") == "Label_7"
        assert manager.find_label_id("Flagged") is None

    def test_list_review_drafts_without_label(self, manager, mock_gmail_service):
        """Missing review label is informational, not an error."""
        mock_gmail_service.users().labels().list().execute.return_value = {"labels": []}

        drafts, message = manager.list_review_drafts()

        assert drafts == []
        assert message
        assert '"Review"' in message
        mock_gmail_service.users().drafts().list.assert_not_called()

    def test_list_review_drafts_filters_by_label(self, manager, draft_factory, serve_drafts):
        serve_drafts(
            draft_factory("d1", "m1", ["DRAFT", "Label_review"], subject="First"),
            draft_factory("d2", "m2", ["DRAFT"], subject="Unlabeled"),
            draft_factory("d3", "m3", ["Label_review"], subject="Third"),
        )

        drafts, message = manager.list_review_drafts()

        assert message is None
        assert [d.id for d in drafts] == ["d1", "d3"]
        assert [d.message_id for d in drafts] == ["m1", "m3"]
        assert drafts[0].subject == "First"

    def test_list_review_drafts_requests_full_format(self, manager, mock_gmail_service, draft_factory, serve_drafts):
        serve_drafts(draft_factory("d1", "m1", ["Label_review"]))

        manager.list_review_drafts()

        mock_gmail_service.users().drafts().get.assert_called_once_with(
            userId="me", id="d1", format="full"
        )

    def test_list_draft_ids_follows_pages(self, manager, mock_gmail_service):
        mock_gmail_service.users().drafts().list().execute.side_effect = [
            {"drafts": [{"id": "d1"}, {"id": "d2"}], "nextPageToken": "page2"},
            {"drafts": [{"id": "d3"}]},
        ]

        assert manager.list_draft_ids() == ["d1", "d2", "d3"]

    def test_list_review_drafts_propagates_provider_errors(self, manager, mock_gmail_service, draft_factory, serve_drafts):
        serve_drafts(draft_factory("d1", "m1", ["Label_review"]))
        mock_gmail_service.users().drafts().get.side_effect = http_error(500)

        with pytest.raises(HttpError):
            manager.list_review_drafts()

    def test_send_draft(self, manager, mock_gmail_service):
        manager.send_draft("d1")

        mock_gmail_service.users().drafts().send.assert_called_once_with(
            userId="me", body={"id": "d1"}
        )

    def test_send_draft_propagates_errors(self, manager, mock_gmail_service):
        mock_gmail_service.users().drafts().send().execute.side_effect = http_error(403)

        with pytest.raises(HttpError):
            manager.send_draft("d1")

    def test_get_or_create_label_existing(self, manager, mock_gmail_service):
        mock_gmail_service.users().labels().list().execute.return_value = {
            "labels": [{"id": "Label_flagged", "name": "flagged"}]
        }

        assert manager.get_or_create_label("Flagged") == "Label_flagged"
        mock_gmail_service.users().labels().create.assert_not_called()

    def test_get_or_create_label_creates(self, manager, mock_gmail_service):
        mock_gmail_service.users().labels().create().execute.return_value = {"id": "Label_new"}

        assert manager.get_or_create_label("Flagged") == "Label_new"
        mock_gmail_service.users().labels().create.assert_called_with(
            userId="me",
            body={
                "name": "Flagged",
                "labelListVisibility": "labelShow",
                "messageListVisibility": "show",
            },
        )

    def test_get_or_create_label_accepts_existing_on_conflict(self, manager, mock_gmail_service):
        """A label created concurrently is reused instead of duplicated."""
        mock_gmail_service.users().labels().list().execute.side_effect = [
            {"labels": []},
            {"labels": [{"id": "Label_race", "name": "Flagged"}]},
        ]
        mock_gmail_service.users().labels().create().execute.side_effect = http_error(409)

        assert manager.get_or_create_label("Flagged") == "Label_race"

    def test_get_or_create_label_other_errors_propagate(self, manager, mock_gmail_service):
        mock_gmail_service.users().labels().create().execute.side_effect = http_error(500)

        with pytest.raises(HttpError):
            manager.get_or_create_label("Flagged")

    def test_get_or_create_label_holds_lock(self, manager):
        lock = threading.Lock()
        seen = []
        original = manager.find_label_id

        def find(name):
            seen.append(lock.locked())
            return original(name)

        manager.find_label_id = find
        manager.service.users().labels().create().execute.return_value = {"id": "Label_new"}

        manager.get_or_create_label("Flagged", lock=lock)

        assert seen and all(seen)
        assert not lock.locked()

    def test_flag_message(self, manager, mock_gmail_service):
        """Flagging adds Flagged and STARRED and drops the review label."""
        mock_gmail_service.users().labels().list().execute.return_value = {
            "labels": [
                {"id": "Label_review", "name": "Review"},
                {"id": "Label_flagged", "name": "Flagged"},
            ]
        }

        manager.flag_message("m1")

        mock_gmail_service.users().messages().modify.assert_called_once_with(
            userId="me",
            id="m1",
            body={
                "addLabelIds": ["Label_flagged", "STARRED"],
                "removeLabelIds": ["Label_review"],
            },
        )

    def test_flag_message_without_review_label(self, manager, mock_gmail_service):
        mock_gmail_service.users().labels().list().execute.return_value = {
            "labels": [{"id": "Label_flagged", "name": "Flagged"}]
        }

        manager.flag_message("m1")

        _, kwargs = mock_gmail_service.users().messages().modify.call_args
        assert kwargs["body"]["removeLabelIds"] == []

    def test_flag_message_with_known_review_label(self, manager, mock_gmail_service):
        mock_gmail_service.users().labels().list().execute.return_value = {
            "labels": [{"id": "Label_flagged", "name": "Flagged"}]
        }

        manager.flag_message("m1", review_label_id="Label_given")

        _, kwargs = mock_gmail_service.users().messages().modify.call_args
        assert kwargs["body"]["removeLabelIds"] == ["Label_given"]
