from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, Optional, Tuple

from application.ports.catalog_port import CatalogPort
from domain.my_list import CatalogEntry, ContentKind

logger = logging.getLogger(__name__)

_TABLE_BY_KIND = {
    ContentKind.MOVIE: "movies",
    ContentKind.TV_SHOW: "tv_shows",
}


class InMemoryCatalogStore(CatalogPort):
    """In-memory catalogue lookup for dev/tests when Postgres is not configured."""

    def __init__(self, entries: Optional[Iterable[CatalogEntry]] = None) -> None:
        self._by_key: Dict[Tuple[ContentKind, str], CatalogEntry] = {}
        for entry in entries or ():
            self.put(entry)

    def put(self, entry: CatalogEntry) -> None:
        self._by_key[(entry.kind, str(entry.content_id))] = entry

    async def find_content(self, *, content_id: str, kind: ContentKind) -> Optional[CatalogEntry]:
        return self._by_key.get((ContentKind(kind), str(content_id)))

    async def close(self) -> None:
        return None


class PostgresCatalogStore(CatalogPort):
    """Read-only catalogue lookup over the `movies` / `tv_shows` tables (asyncpg).

    The schema is best-effort bootstrapped at runtime for local/dev; the
    tables are populated by `scripts/seed_catalog.py` or an upstream service.
    """

    def __init__(
        self,
        *,
        dsn: str,
        min_size: int = 1,
        max_size: int = 5,
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
            logger.info("PostgreSQL catalog store pool initialized")
            return self._pool

    async def _ensure_schema(self) -> None:
        pool = self._pool
        if pool is None:
            return
        async with pool.acquire() as conn:
            await conn.execute(
                """
                CREATE TABLE IF NOT EXISTS movies (
                    id text PRIMARY KEY,
                    title text NOT NULL,
                    description text NOT NULL DEFAULT '',
                    genres text[] NOT NULL DEFAULT '{}',
                    release_date date,
                    director text,
                    actors text[] NOT NULL DEFAULT '{}'
                );
                """
            )
            await conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tv_shows (
                    id text PRIMARY KEY,
                    title text NOT NULL,
                    description text NOT NULL DEFAULT '',
                    genres text[] NOT NULL DEFAULT '{}',
                    episodes jsonb NOT NULL DEFAULT '[]'::jsonb
                );
                """
            )

    async def find_content(self, *, content_id: str, kind: ContentKind) -> Optional[CatalogEntry]:
        kind = ContentKind(kind)
        table = _TABLE_BY_KIND[kind]
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT id, title, description, genres FROM {table} WHERE id = $1;",
                str(content_id),
            )
        if row is None:
            return None
        data = dict(row)
        return CatalogEntry(
            content_id=str(data["id"]),
            kind=kind,
            title=str(data.get("title") or ""),
            genres=tuple(str(g) for g in (data.get("genres") or [])),
            description=data.get("description"),
        )

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("PostgreSQL catalog store pool closed")
