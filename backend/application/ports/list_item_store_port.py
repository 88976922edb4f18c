from __future__ import annotations

from typing import List, Optional, Protocol

from domain.my_list import CursorPayload, ListItem


class UniqueConstraintViolation(Exception):
    """Raised by a store when an insert would duplicate (user_id, content_id)."""

    def __init__(self, *, user_id: str, content_id: str) -> None:
        super().__init__(f"duplicate list item: user_id={user_id} content_id={content_id}")
        self.user_id = user_id
        self.content_id = content_id


class ListItemStorePort(Protocol):
    async def insert_item(self, item: ListItem) -> ListItem:
        """Persist a new item.

        Uniqueness of (user_id, content_id) is enforced by the store at write
        time; a violation raises `UniqueConstraintViolation`.
        """
        ...

    async def delete_item(self, *, user_id: str, content_id: str) -> int:
        """Delete the matching item and return the number of rows removed."""
        ...

    async def scan_items(
        self,
        *,
        user_id: str,
        after: Optional[CursorPayload] = None,
        limit: int,
    ) -> List[ListItem]:
        """Return up to `limit` items ordered by (added_at, content_id) descending.

        With `after`, only rows strictly after that position are returned.
        """
        ...

    async def close(self) -> None:
        ...
