"""Gmail operations used by the triage gateway."""

import threading
from contextlib import nullcontext
from typing import Dict, List, Optional, Tuple

from googleapiclient.errors import HttpError

from .draft_parser import DraftParser, DraftRecord
from ..utils.config import Settings, settings as default_settings
from ..utils.logger import get_logger

logger = get_logger(__name__)

STARRED_LABEL_ID = "STARRED"


def missing_review_label_message(label_name: str) -> str:
    return (
        f'No "{label_name}" label found. '
        f'Please create a label named "{label_name}" in Gmail.'
    )


class GmailManager:
    """Sequences Gmail API calls for listing, sending and flagging drafts."""

    def __init__(self, service, settings: Optional[Settings] = None) -> None:
        self.service = service
        self.settings = settings or default_settings
        self.parser = DraftParser()

    def list_labels(self) -> List[Dict]:
        results = self.service.users().labels().list(userId="me").execute()
        return results.get("labels", [])

    def find_label_id(self, label_name: str) -> Optional[str]:
        """Get label ID by case-insensitive name."""
        wanted = label_name.lower()
        for label in self.list_labels():
            if label.get("name", "").lower() == wanted:
                return label["id"]
        return None

    def get_review_label_id(self) -> Optional[str]:
        return self.find_label_id(self.settings.review_label_name)

    def list_draft_ids(self) -> List[str]:
        """List every draft ID, following page tokens."""
        draft_ids = []
        page_token = None

        while True:
            results = (
                self.service.users()
                .drafts()
                .list(userId="me", pageToken=page_token)
                .execute()
            )
            draft_ids.extend(d["id"] for d in results.get("drafts", []))

            page_token = results.get("nextPageToken")
            if not page_token:
                break

        logger.info(f"Retrieved {len(draft_ids)} drafts")
        return draft_ids

    def get_draft(self, draft_id: str) -> Dict:
        return (
            self.service.users()
            .drafts()
            .get(userId="me", id=draft_id, format="full")
            .execute()
        )

    def list_review_drafts(self) -> Tuple[List[DraftRecord], Optional[str]]:
        """Return drafts carrying the review label, or an explanatory message.

        Provider errors propagate; no partial list is ever returned.
        """
        review_label_id = self.get_review_label_id()
        if not review_label_id:
            logger.info("Review label not found")
            return [], missing_review_label_message(self.settings.review_label_name)

        records = []
        for draft_id in self.list_draft_ids():
            draft = self.get_draft(draft_id)
            label_ids = (draft.get("message") or {}).get("labelIds", [])
            if review_label_id in label_ids:
                records.append(self.parser.parse(draft))

        logger.info(f"Found {len(records)} drafts awaiting review")
        return records, None

    def send_draft(self, draft_id: str) -> Dict:
        """Send a draft by ID. Not idempotent."""
        result = (
            self.service.users()
            .drafts()
            .send(userId="me", body={"id": draft_id})
            .execute()
        )
        logger.info(f"Sent draft {draft_id}")
        return result

    def get_or_create_label(self, label_name: str, lock: Optional[threading.Lock] = None) -> str:
        """Get existing label ID or create new label.

        Runs under ``lock`` when given. A 409 from the create call means the
        label appeared meanwhile; the existing one is used.
        """
        with lock or nullcontext():
            label_id = self.find_label_id(label_name)
            if label_id:
                return label_id

            label_object = {
                "name": label_name,
                "labelListVisibility": "labelShow",
                "messageListVisibility": "show",
            }
            try:
                created_label = (
                    self.service.users()
                    .labels()
                    .create(userId="me", body=label_object)
                    .execute()
                )
            except HttpError as error:
                if error.resp.status != 409:
                    raise
                label_id = self.find_label_id(label_name)
                if not label_id:
                    raise
                logger.info(f"Label {label_name} already existed, reusing it")
                return label_id

            logger.info(f"Created new label: {label_name}")
            return created_label["id"]

    def modify_message_labels(
        self,
        message_id: str,
        add_label_ids: List[str],
        remove_label_ids: List[str],
    ) -> None:
        self.service.users().messages().modify(
            userId="me",
            id=message_id,
            body={
                "addLabelIds": add_label_ids,
                "removeLabelIds": remove_label_ids,
            },
        ).execute()
        logger.debug(f"Modified labels for message {message_id}")

    def flag_message(
        self,
        message_id: str,
        review_label_id: Optional[str] = None,
        lock: Optional[threading.Lock] = None,
    ) -> None:
        """Add Flagged and STARRED to a draft's message and drop the review label."""
        flagged_label_id = self.get_or_create_label(self.settings.flagged_label_name, lock=lock)
        if review_label_id is None:
            review_label_id = self.get_review_label_id()

        self.modify_message_labels(
            message_id,
            add_label_ids=[flagged_label_id, STARRED_LABEL_ID],
            remove_label_ids=[review_label_id] if review_label_id else [],
        )
        logger.info(f"Flagged message {message_id}")
