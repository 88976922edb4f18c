from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from datetime import datetime

from domain.my_list.errors import InvalidCursor
from domain.my_list.list_item import ListItem, format_timestamp, parse_timestamp


@dataclass(frozen=True)
class CursorPayload:
    """Pagination boundary: the position of the last item a caller has seen."""

    added_at: str
    content_id: str

    @classmethod
    def from_item(cls, item: ListItem) -> "CursorPayload":
        return cls(added_at=format_timestamp(item.added_at), content_id=item.content_id)

    def added_at_datetime(self) -> datetime:
        return parse_timestamp(self.added_at)

    def to_dict(self) -> dict[str, str]:
        return {"addedAt": self.added_at, "contentId": self.content_id}

    def cache_fragment(self) -> dict[str, str]:
        # Serialized with sort_keys by callers; equal payloads give equal keys.
        return self.to_dict()


def _canonical_json(value: dict) -> str:
    return json.dumps(value, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def encode_cursor(payload: CursorPayload) -> str:
    """Serialize the cursor to an opaque, URL-safe token that callers pass back verbatim."""
    blob = _canonical_json(payload.to_dict()).encode("utf-8")
    return base64.urlsafe_b64encode(blob).decode("ascii")


def decode_cursor(token: str) -> CursorPayload:
    """Parse a caller-provided token.

    Strict: anything that is not a token produced by `encode_cursor` (modulo
    key order) raises `InvalidCursor` instead of being defaulted. `addedAt`
    must be in the exact millisecond form `encode_cursor` writes, so the
    cursor never bounds the scan at a different instant than it names.
    """
    if not isinstance(token, str) or not token:
        raise InvalidCursor()
    if "+" in token or "/" in token:
        raise InvalidCursor()
    try:
        raw = base64.b64decode(token.encode("ascii"), altchars=b"-_", validate=True)
        parsed = json.loads(raw.decode("utf-8"))
    except (UnicodeError, binascii.Error, ValueError) as exc:
        raise InvalidCursor() from exc

    if not isinstance(parsed, dict):
        raise InvalidCursor()
    added_at = parsed.get("addedAt")
    content_id = parsed.get("contentId")
    if not isinstance(added_at, str) or not added_at:
        raise InvalidCursor()
    if not isinstance(content_id, str) or not content_id:
        raise InvalidCursor()

    payload = CursorPayload(added_at=added_at, content_id=content_id)
    try:
        boundary = payload.added_at_datetime()
    except ValueError as exc:
        raise InvalidCursor() from exc
    if format_timestamp(boundary) != added_at:
        raise InvalidCursor()
    return payload
