from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class ContentKind(str, Enum):
    """Kinds of catalogue content a user can keep in My List."""

    MOVIE = "Movie"
    TV_SHOW = "TVShow"


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision and normalize to UTC.

    Items are ordered (and cursors compared) by their timestamp, so every
    store must hold exactly what a cursor can carry.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def utc_now_millis() -> datetime:
    return truncate_to_millis(datetime.now(timezone.utc))


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a `Z` suffix."""
    value = truncate_to_millis(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_timestamp(raw: str) -> datetime:
    """Inverse of `format_timestamp`; accepts any ISO-8601 offset form."""
    text = (raw or "").strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return truncate_to_millis(datetime.fromisoformat(text))


@dataclass(frozen=True)
class CatalogEntry:
    """Canonical catalogue metadata denormalized into a list item."""

    content_id: str
    kind: ContentKind
    title: str
    genres: tuple[str, ...] = ()
    description: Optional[str] = None


@dataclass(frozen=True)
class ListItem:
    """One entry of a user's personal list. Immutable once created."""

    user_id: str
    content_id: str
    content_kind: ContentKind
    title: str
    genres: tuple[str, ...] = field(default_factory=tuple)
    added_at: datetime = field(default_factory=utc_now_millis)

    def sort_key(self) -> tuple[datetime, str]:
        # Newest-first pagination sorts on this key in reverse.
        return (self.added_at, self.content_id)

    def to_public(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "contentId": self.content_id,
            "contentType": self.content_kind.value,
            "title": self.title,
            "genres": list(self.genres),
            "addedAt": format_timestamp(self.added_at),
        }


@dataclass(frozen=True)
class ListPage:
    """One page of My List, as returned (and cached) by the list operation."""

    items: tuple[ListItem, ...] = ()
    next_cursor: Optional[str] = None

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None

    def to_public(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"items": [item.to_public() for item in self.items]}
        if self.next_cursor is not None:
            payload["nextCursor"] = self.next_cursor
        return payload
