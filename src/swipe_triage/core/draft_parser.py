"""Draft payload parsing into flat records."""

import base64
import binascii
import re
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Dict, List, Optional

import dateparser

from ..utils.logger import get_logger

logger = get_logger(__name__)

TAG_PATTERN = re.compile(r'<[^>]*>')
ELLIPSIS = "..."


@dataclass
class DraftRecord:
    """Flat representation of a Gmail draft awaiting review."""

    id: str
    message_id: str
    to: str
    sender: str
    subject: str
    body: str
    snippet: str
    date: str

    def to_dict(self) -> Dict[str, str]:
        """Serialize using the gateway's JSON field names."""
        data = asdict(self)
        data["messageId"] = data.pop("message_id")
        data["from"] = data.pop("sender")
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "DraftRecord":
        """Build a record from the gateway's JSON shape."""
        return cls(
            id=data.get("id", ""),
            message_id=data.get("messageId") or "",
            to=data.get("to", ""),
            sender=data.get("from", ""),
            subject=data.get("subject", ""),
            body=data.get("body", ""),
            snippet=data.get("snippet", ""),
            date=data.get("date", ""),
        )

    @property
    def parsed_date(self) -> Optional[datetime]:
        """Date header as a datetime, if it can be parsed."""
        if not self.date:
            return None
        try:
            return dateparser.parse(self.date)
        except Exception as e:
            logger.warning(f"Failed to parse date '{self.date}': {e}")
            return None


def decode_body_data(data: str) -> str:
    """Decode Gmail's base64 transport encoding into text.

    Gmail uses the URL-safe alphabet and may omit padding; both alphabets are
    accepted so that hand-built payloads decode the same way.
    """
    normalized = data.replace('+', '-').replace('/', '_')
    normalized += '=' * (-len(normalized) % 4)
    try:
        raw = base64.urlsafe_b64decode(normalized)
    except (binascii.Error, ValueError) as e:
        logger.warning(f"Failed to decode body data: {e}")
        return ""
    return raw.decode('utf-8', errors='replace')


def format_body(body: str, limit: int = 500) -> str:
    """Strip markup and truncate body text for display."""
    stripped = TAG_PATTERN.sub('', body)
    if len(stripped) > limit:
        return stripped[:limit] + ELLIPSIS
    return stripped


class DraftParser:
    """Turns full-format Gmail draft resources into DraftRecords."""

    def parse(self, draft: Dict) -> DraftRecord:
        message = draft.get('message') or {}
        payload = message.get('payload') or {}
        headers = payload.get('headers') or []

        record = DraftRecord(
            id=draft['id'],
            message_id=message.get('id', ''),
            to=self.get_header(headers, 'To'),
            sender=self.get_header(headers, 'From'),
            subject=self.get_header(headers, 'Subject'),
            body=self.extract_body(payload),
            snippet=message.get('snippet', ''),
            date=self.get_header(headers, 'Date'),
        )
        logger.debug(f"Parsed draft {record.id}: {record.subject[:50]}")
        return record

    def get_header(self, headers: List[Dict], name: str) -> str:
        """Case-insensitive header lookup, empty string when absent."""
        wanted = name.lower()
        for header in headers:
            if header.get('name', '').lower() == wanted:
                return header.get('value', '')
        return ''

    def extract_body(self, payload: Dict) -> str:
        """Decode the first available body source.

        Precedence: the payload's own body data, then the first text/plain
        part, then the first text/html part. Only top-level parts are
        considered.
        """
        data = (payload.get('body') or {}).get('data')
        if data:
            return decode_body_data(data)

        parts = payload.get('parts') or []
        for mime_type in ('text/plain', 'text/html'):
            part = self._first_part(parts, mime_type)
            if part is None:
                continue
            data = (part.get('body') or {}).get('data')
            if data:
                return decode_body_data(data)
            # an empty first match still wins over later parts
            return ''
        return ''

    def _first_part(self, parts: List[Dict], mime_type: str) -> Optional[Dict]:
        for part in parts:
            if part.get('mimeType') == mime_type:
                return part
        return None
