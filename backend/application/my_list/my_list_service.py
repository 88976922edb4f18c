"""
My List application service.

Owns the three public operations (add / remove / list) and the read cache
that sits in front of the list operation. Persistence and catalogue lookups
are delegated to ports; the cache is passed in by the caller so its lifetime
is controlled by whoever wires the service.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Callable, Optional

from application.ports.catalog_port import CatalogPort
from application.ports.list_cache_port import ListCachePort
from application.ports.list_item_store_port import ListItemStorePort, UniqueConstraintViolation
from domain.my_list import (
    AlreadyInList,
    ContentKind,
    ContentNotFound,
    CursorPayload,
    InternalError,
    LimitOutOfRange,
    ListItem,
    ListPage,
    MyListError,
    NotInList,
    decode_cursor,
    encode_cursor,
    truncate_to_millis,
    utc_now_millis,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def build_cache_key(user_id: str, limit: int, cursor: Optional[CursorPayload]) -> str:
    """Deterministic cache key for one page request.

    Keys are canonical JSON (sorted keys), so two cursors with the same
    fields map to the same entry regardless of how they were built.
    """
    return json.dumps(
        {
            "userId": str(user_id),
            "limit": int(limit),
            "cursor": cursor.cache_fragment() if cursor is not None else None,
        },
        ensure_ascii=False,
        sort_keys=True,
        separators=(",", ":"),
    )


class MyListService:
    def __init__(
        self,
        *,
        store: ListItemStorePort,
        catalog: CatalogPort,
        cache: ListCachePort,
        max_limit: int = MAX_LIMIT,
        clock: Callable[[], datetime] = utc_now_millis,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._cache = cache
        self._max_limit = int(max_limit)
        self._clock = clock
        # Bumped by every invalidation; a scan that overlaps one must not be cached.
        self._generation = 0

    @property
    def max_limit(self) -> int:
        return self._max_limit

    async def add_to_list(
        self,
        *,
        user_id: str,
        content_id: str,
        content_kind: ContentKind,
    ) -> ListItem:
        kind = ContentKind(content_kind)
        try:
            entry = await self._catalog.find_content(content_id=content_id, kind=kind)
        except Exception as exc:
            logger.exception(
                "catalog lookup failed (operation=add user_id=%s content_id=%s)", user_id, content_id
            )
            raise InternalError("add") from exc
        if entry is None:
            raise ContentNotFound(content_id, kind)

        item = ListItem(
            user_id=str(user_id),
            content_id=str(content_id),
            content_kind=kind,
            title=entry.title,
            genres=tuple(entry.genres),
            added_at=truncate_to_millis(self._clock()),
        )
        try:
            created = await self._store.insert_item(item)
        except UniqueConstraintViolation as exc:
            raise AlreadyInList(content_id) from exc
        except Exception as exc:
            logger.exception(
                "failed to add item to list (operation=add user_id=%s content_id=%s)", user_id, content_id
            )
            raise InternalError("add") from exc

        self._invalidate(user_id=user_id, reason="add")
        return created

    async def remove_from_list(self, *, user_id: str, content_id: str) -> None:
        try:
            removed = await self._store.delete_item(user_id=str(user_id), content_id=str(content_id))
        except Exception as exc:
            logger.exception(
                "failed to remove item from list (operation=remove user_id=%s content_id=%s)",
                user_id,
                content_id,
            )
            raise InternalError("remove") from exc
        if removed == 0:
            raise NotInList(content_id)

        self._invalidate(user_id=user_id, reason="remove")

    async def list_items(
        self,
        *,
        user_id: str,
        limit: int = DEFAULT_LIMIT,
        cursor: Optional[str] = None,
    ) -> ListPage:
        """List one page of the user's items, newest first.

        `cursor` is the opaque `next_cursor` of a previous page. Raises
        `LimitOutOfRange` for a limit outside [1, max_limit] and
        `InvalidCursor` for a malformed token.
        """
        limit = int(limit)
        if limit < 1 or limit > self._max_limit:
            raise LimitOutOfRange(limit, max_limit=self._max_limit)
        payload = decode_cursor(cursor) if cursor is not None else None
        return await self.list_page(user_id=user_id, limit=limit, cursor=payload)

    async def list_page(
        self,
        *,
        user_id: str,
        limit: int,
        cursor: Optional[CursorPayload] = None,
    ) -> ListPage:
        key = build_cache_key(user_id, limit, cursor)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        generation = self._generation

        try:
            rows = await self._store.scan_items(user_id=str(user_id), after=cursor, limit=limit + 1)
        except MyListError:
            raise
        except Exception as exc:
            logger.exception("failed to list items (operation=list user_id=%s)", user_id)
            raise InternalError("list") from exc

        has_more = len(rows) > limit
        kept = tuple(rows[:limit])
        next_cursor = encode_cursor(CursorPayload.from_item(kept[-1])) if has_more else None

        page = ListPage(items=kept, next_cursor=next_cursor)
        if generation == self._generation:
            self._cache.set(key, page)
        else:
            logger.debug("Skipped caching list page read across an invalidation (user_id=%s)", user_id)
        return page

    def _invalidate(self, *, user_id: str, reason: str) -> None:
        # Whole-cache clear: drops every page of every limit/cursor for this
        # user (and, as a side effect, for everyone else).
        self._generation += 1
        self._cache.clear()
        logger.debug("Invalidated list cache after mutation (user_id=%s reason=%s)", user_id, reason)
