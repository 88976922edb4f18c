from __future__ import annotations

import logging
from functools import lru_cache

from application.my_list import MyListService
from config.database import get_postgres_dsn, sanitize_dsn
from config.settings import (
    MY_LIST_CACHE_BACKEND,
    MY_LIST_CACHE_MAX_ITEMS,
    MY_LIST_CACHE_TTL_SECONDS,
    MY_LIST_MAX_LIMIT,
)

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _build_list_item_store():
    from infrastructure.persistence.postgres.list_item_store import (
        InMemoryListItemStore,
        PostgresListItemStore,
    )

    dsn = get_postgres_dsn()
    if dsn:
        logger.info("My List store: postgres (%s)", sanitize_dsn(dsn))
        return PostgresListItemStore(dsn=dsn)
    logger.warning("My List store: in-memory (POSTGRES_DSN not set; data is not persisted)")
    return InMemoryListItemStore()


@lru_cache(maxsize=1)
def _build_catalog_store():
    from infrastructure.persistence.postgres.catalog_store import (
        InMemoryCatalogStore,
        PostgresCatalogStore,
    )

    dsn = get_postgres_dsn()
    if dsn:
        return PostgresCatalogStore(dsn=dsn)
    return InMemoryCatalogStore()


@lru_cache(maxsize=1)
def _build_list_cache():
    from infrastructure.cache import build_list_cache

    return build_list_cache(
        backend=MY_LIST_CACHE_BACKEND,
        ttl_seconds=MY_LIST_CACHE_TTL_SECONDS,
        max_items=MY_LIST_CACHE_MAX_ITEMS,
    )


@lru_cache(maxsize=1)
def _build_my_list_service() -> MyListService:
    return MyListService(
        store=_build_list_item_store(),
        catalog=_build_catalog_store(),
        cache=_build_list_cache(),
        max_limit=MY_LIST_MAX_LIMIT,
    )


def get_my_list_service() -> MyListService:
    return _build_my_list_service()


async def shutdown_dependencies() -> None:
    """Best-effort shutdown hooks for long-lived adapters (connection pools)."""
    if _build_list_cache.cache_info().currsize:
        _build_list_cache().clear()

    for builder in (_build_list_item_store, _build_catalog_store):
        if not builder.cache_info().currsize:
            continue
        close = getattr(builder(), "close", None)
        if callable(close):
            await close()
        builder.cache_clear()
    _build_my_list_service.cache_clear()
    _build_list_cache.cache_clear()
