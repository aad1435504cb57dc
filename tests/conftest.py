"""Pytest configuration and fixtures."""

import base64
import os
from unittest.mock import Mock

import pytest

# Set up test environment
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-client-secret"
os.environ["DEBUG"] = "true"

REVIEW_LABEL = {"id": "Label_review", "name": "Review"}
FLAGGED_LABEL = {"id": "Label_flagged", "name": "Flagged"}


def encode(text: str) -> str:
    """Encode text the way Gmail transports body data."""
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii")


def make_draft(
    draft_id,
    message_id,
    label_ids,
    to="a@b.com",
    subject="Hi",
    body="<p>Hello</p>",
    snippet="Hello",
):
    """Full-format Gmail draft resource."""
    return {
        "id": draft_id,
        "message": {
            "id": message_id,
            "threadId": f"thread_{message_id}",
            "labelIds": label_ids,
            "snippet": snippet,
            "payload": {
                "mimeType": "text/html",
                "headers": [
                    {"name": "To", "value": to},
                    {"name": "From", "value": "Me <me@example.com>"},
                    {"name": "Subject", "value": subject},
                    {"name": "Date", "value": "Wed, 15 Nov 2023 10:30:00 +0000"},
                ],
                "body": {"data": encode(body)},
            },
        },
    }


def install_drafts(service, drafts):
    """Make drafts().list/get on a mocked service serve the given drafts."""
    by_id = {d["id"]: d for d in drafts}

    service.users().drafts().list.return_value.execute.return_value = {
        "drafts": [{"id": d["id"], "message": {"id": d["message"]["id"]}} for d in drafts]
    }

    def get(userId, id, format):
        request = Mock()
        request.execute.return_value = by_id[id]
        return request

    service.users().drafts().get.side_effect = get


@pytest.fixture
def mock_gmail_service():
    """Mock Gmail API service."""
    service = Mock()

    service.users.return_value = Mock()

    # Labels
    service.users().labels.return_value = Mock()
    service.users().labels().list.return_value.execute.return_value = {
        "labels": [
            {"id": "INBOX", "name": "INBOX"},
            {"id": "STARRED", "name": "STARRED"},
            REVIEW_LABEL,
        ]
    }

    # Drafts
    service.users().drafts.return_value = Mock()
    service.users().drafts().list.return_value.execute.return_value = {"drafts": []}
    service.users().drafts().send.return_value.execute.return_value = {
        "id": "sent_message_id",
        "labelIds": ["SENT"],
    }

    # Messages
    service.users().messages.return_value = Mock()
    service.users().messages().modify.return_value.execute.return_value = {}

    return service


@pytest.fixture
def sample_draft():
    """Draft carrying the review label."""
    return make_draft("draft1", "msg1", ["DRAFT", REVIEW_LABEL["id"]])


@pytest.fixture
def sample_draft_record():
    """Draft record as the gateway serves it."""
    from swipe_triage.core.draft_parser import DraftRecord

    return DraftRecord(
        id="draft1",
        message_id="msg1",
        to="a@b.com",
        sender="Me <me@example.com>",
        subject="Hi",
        body="<p>Hello</p>",
        snippet="Hello",
        date="Wed, 15 Nov 2023 10:30:00 +0000",
    )


@pytest.fixture
def test_settings():
    """Settings isolated from the developer's environment."""
    from swipe_triage.utils.config import Settings

    return Settings(
        _env_file=None,
        google_client_id="test-client-id",
        google_client_secret="test-client-secret",
        client_url="http://client.test",
        advance_delay=0.0,
    )


@pytest.fixture
def mock_keyring():
    """Mock keyring for secure storage testing."""
    storage = {}

    def set_password(service, username, password):
        storage[f"{service}:{username}"] = password

    def get_password(service, username):
        return storage.get(f"{service}:{username}")

    def delete_password(service, username):
        key = f"{service}:{username}"
        if key in storage:
            del storage[key]

    with pytest.MonkeyPatch().context() as m:
        m.setattr("keyring.set_password", set_password)
        m.setattr("keyring.get_password", get_password)
        m.setattr("keyring.delete_password", delete_password)
        yield storage


@pytest.fixture
def draft_factory():
    """Build full-format draft resources."""
    return make_draft


@pytest.fixture
def serve_drafts(mock_gmail_service):
    """Serve the given drafts from the mocked service."""
    def _serve(*drafts):
        install_drafts(mock_gmail_service, list(drafts))
    return _serve


@pytest.fixture
def mock_gmail_auth(mock_gmail_service):
    """OAuth helper that never talks to Google."""
    auth = Mock()
    auth.authorization_url.return_value = (
        "https://accounts.google.com/o/oauth2/auth?state=state-1",
        "state-1",
        "verifier-1",
    )
    auth.exchange_code.return_value = Mock(name="credentials")
    auth.get_gmail_service.return_value = mock_gmail_service
    return auth


@pytest.fixture
def gateway_app(test_settings, mock_gmail_auth):
    """Gateway wired to the mocked OAuth helper and Gmail service."""
    from swipe_triage.api import create_app
    from swipe_triage.core.session import SessionStore

    return create_app(settings=test_settings, sessions=SessionStore(), gmail_auth=mock_gmail_auth)
