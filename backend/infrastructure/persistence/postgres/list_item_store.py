from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

from application.ports.list_item_store_port import ListItemStorePort, UniqueConstraintViolation
from domain.my_list import ContentKind, CursorPayload, ListItem, truncate_to_millis

logger = logging.getLogger(__name__)


class InMemoryListItemStore(ListItemStorePort):
    """In-memory My List store for dev/tests when Postgres is not configured."""

    def __init__(self) -> None:
        # Keyed by the unique pair; check-and-insert never awaits in between.
        self._by_key: Dict[Tuple[str, str], ListItem] = {}

    async def insert_item(self, item: ListItem) -> ListItem:
        key = (str(item.user_id), str(item.content_id))
        if key in self._by_key:
            raise UniqueConstraintViolation(user_id=key[0], content_id=key[1])
        self._by_key[key] = item
        return item

    async def delete_item(self, *, user_id: str, content_id: str) -> int:
        removed = self._by_key.pop((str(user_id), str(content_id)), None)
        return 1 if removed is not None else 0

    async def scan_items(
        self,
        *,
        user_id: str,
        after: Optional[CursorPayload] = None,
        limit: int,
    ) -> List[ListItem]:
        items = [i for i in self._by_key.values() if i.user_id == str(user_id)]
        if after is not None:
            boundary = (after.added_at_datetime(), after.content_id)
            items = [i for i in items if i.sort_key() < boundary]
        items.sort(key=lambda x: x.sort_key(), reverse=True)
        return items[: max(0, int(limit))]

    async def close(self) -> None:
        return None


class PostgresListItemStore(ListItemStorePort):
    """Postgres-backed My List storage (asyncpg)."""

    def __init__(
        self,
        *,
        dsn: str,
        min_size: int = 1,
        max_size: int = 10,
    ) -> None:
        self._dsn = dsn
        self._min_size = min_size
        self._max_size = max_size
        self._pool = None
        self._pool_lock = asyncio.Lock()

    async def _get_pool(self):
        if self._pool is not None:
            return self._pool
        async with self._pool_lock:
            if self._pool is not None:
                return self._pool
            import asyncpg  # type: ignore

            self._pool = await asyncpg.create_pool(
                self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                ssl=False,
            )
            await self._ensure_schema()
            logger.info("PostgreSQL my-list store pool initialized")
            return self._pool

    async def _ensure_schema(self) -> None:
        pool = self._pool
        if pool is None:
            return
        async with pool.acquire() as conn:
            # content_id uses the "C" collation so the index order is plain
            # codepoint order, matching cursor comparison.
            await conn.execute(
                """
                CREATE TABLE IF NOT EXISTS my_list_items (
                    id bigserial PRIMARY KEY,
                    user_id text NOT NULL,
                    content_id text COLLATE "C" NOT NULL,
                    content_type text NOT NULL CHECK (content_type IN ('Movie', 'TVShow')),
                    title text NOT NULL,
                    genres text[] NOT NULL DEFAULT '{}',
                    added_at timestamptz NOT NULL DEFAULT NOW()
                );
                """
            )
            await conn.execute(
                "CREATE UNIQUE INDEX IF NOT EXISTS my_list_items_user_content_uidx "
                "ON my_list_items(user_id, content_id);"
            )
            await conn.execute(
                "CREATE INDEX IF NOT EXISTS my_list_items_user_added_idx "
                "ON my_list_items(user_id, added_at DESC, content_id DESC);"
            )

    @staticmethod
    def _row_to_item(row: dict) -> ListItem:
        # The surrogate `id` column stays inside the store.
        return ListItem(
            user_id=str(row.get("user_id") or ""),
            content_id=str(row.get("content_id") or ""),
            content_kind=ContentKind(str(row.get("content_type"))),
            title=str(row.get("title") or ""),
            genres=tuple(str(g) for g in (row.get("genres") or [])),
            added_at=truncate_to_millis(row["added_at"]),
        )

    async def insert_item(self, item: ListItem) -> ListItem:
        import asyncpg  # type: ignore

        pool = await self._get_pool()
        async with pool.acquire() as conn:
            try:
                row = await conn.fetchrow(
                    """
                    INSERT INTO my_list_items (user_id, content_id, content_type, title, genres, added_at)
                    VALUES ($1, $2, $3, $4, $5, $6)
                    RETURNING user_id, content_id, content_type, title, genres, added_at;
                    """,
                    str(item.user_id),
                    str(item.content_id),
                    item.content_kind.value,
                    item.title,
                    list(item.genres),
                    item.added_at,
                )
            except asyncpg.UniqueViolationError as exc:
                raise UniqueConstraintViolation(
                    user_id=str(item.user_id),
                    content_id=str(item.content_id),
                ) from exc
        assert row is not None
        return self._row_to_item(dict(row))

    async def delete_item(self, *, user_id: str, content_id: str) -> int:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(
                """
                DELETE FROM my_list_items
                WHERE user_id = $1
                  AND content_id = $2
                RETURNING id;
                """,
                str(user_id),
                str(content_id),
            )
        return len(rows)

    async def scan_items(
        self,
        *,
        user_id: str,
        after: Optional[CursorPayload] = None,
        limit: int,
    ) -> List[ListItem]:
        pool = await self._get_pool()
        params: list[Any] = [str(user_id)]
        sql = (
            "SELECT user_id, content_id, content_type, title, genres, added_at "
            "FROM my_list_items WHERE user_id = $1"
        )
        if after is not None:
            params.append(after.added_at_datetime())
            params.append(after.content_id)
            sql += f" AND (added_at, content_id) < (${len(params) - 1}, ${len(params)})"
        sql += " ORDER BY added_at DESC, content_id DESC"
        params.append(max(0, int(limit)))
        sql += f" LIMIT ${len(params)}"
        async with pool.acquire() as conn:
            rows = await conn.fetch(sql, *params)
        return [self._row_to_item(dict(r)) for r in rows]

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("PostgreSQL my-list store pool closed")
