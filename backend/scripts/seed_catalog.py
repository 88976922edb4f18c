import asyncio
import json
import logging
import sys
from datetime import date, timedelta
from pathlib import Path

# Add backend root to sys.path to allow imports
backend_root = Path(__file__).parent.parent
sys.path.append(str(backend_root))

import asyncpg

from config.database import get_postgres_dsn, sanitize_dsn
from domain.my_list import CatalogEntry, ContentKind, ListItem, utc_now_millis
from infrastructure.persistence.postgres.catalog_store import PostgresCatalogStore
from infrastructure.persistence.postgres.list_item_store import PostgresListItemStore

logger = logging.getLogger("seed_catalog")

MOVIES = [
    {
        "id": "movie-101",
        "title": "The Dawn of Code",
        "description": "A thrilling journey through software craftsmanship.",
        "genres": ["Action", "Drama"],
        "release_date": date(2022, 1, 1),
        "director": "Avery Jenkins",
        "actors": ["Casey Lee", "Robin Smith"],
    },
    {
        "id": "movie-102",
        "title": "Refactor Reloaded",
        "description": "Engineers refactor code to save the world from bugs.",
        "genres": ["SciFi", "Action"],
        "release_date": date(2023, 5, 10),
        "director": "Morgan Wu",
        "actors": ["Taylor Kim", "Jordan Brooks"],
    },
]

TV_SHOWS = [
    {
        "id": "show-201",
        "title": "Galaxy Builders",
        "description": "Explorers build civilizations planet by planet.",
        "genres": ["SciFi", "Fantasy"],
        "episodes": [
            {
                "episodeNumber": 1,
                "seasonNumber": 1,
                "releaseDate": "2021-09-01",
                "director": "Sam Patel",
                "actors": ["Alex Morgan"],
            }
        ],
    },
]

DEMO_USER_ID = "user-001"


async def seed() -> None:
    dsn = get_postgres_dsn()
    if not dsn:
        logger.error("No POSTGRES_DSN / POSTGRES_HOST configured; nothing to seed.")
        return

    logger.info("Connecting to %s", sanitize_dsn(dsn))

    # Let the stores bootstrap their own schema before we write rows.
    catalog = PostgresCatalogStore(dsn=dsn)
    list_store = PostgresListItemStore(dsn=dsn)
    await catalog._get_pool()
    await list_store._get_pool()

    conn = await asyncpg.connect(dsn)
    try:
        logger.info("Clearing existing catalogue and list items...")
        await conn.execute("DELETE FROM my_list_items;")
        await conn.execute("DELETE FROM movies;")
        await conn.execute("DELETE FROM tv_shows;")

        for m in MOVIES:
            await conn.execute(
                """
                INSERT INTO movies (id, title, description, genres, release_date, director, actors)
                VALUES ($1, $2, $3, $4, $5, $6, $7)
                """,
                m["id"],
                m["title"],
                m["description"],
                m["genres"],
                m["release_date"],
                m["director"],
                m["actors"],
            )
        for s in TV_SHOWS:
            await conn.execute(
                """
                INSERT INTO tv_shows (id, title, description, genres, episodes)
                VALUES ($1, $2, $3, $4, $5::jsonb)
                """,
                s["id"],
                s["title"],
                s["description"],
                s["genres"],
                json.dumps(s["episodes"], ensure_ascii=False),
            )
        logger.info("Inserted %d movies and %d shows.", len(MOVIES), len(TV_SHOWS))
    finally:
        await conn.close()

    try:
        now = utc_now_millis()
        demo_entries = [
            CatalogEntry(
                content_id=MOVIES[0]["id"],
                kind=ContentKind.MOVIE,
                title=MOVIES[0]["title"],
                genres=tuple(MOVIES[0]["genres"]),
            ),
            CatalogEntry(
                content_id=TV_SHOWS[0]["id"],
                kind=ContentKind.TV_SHOW,
                title=TV_SHOWS[0]["title"],
                genres=tuple(TV_SHOWS[0]["genres"]),
            ),
        ]
        for offset, entry in enumerate(demo_entries):
            await list_store.insert_item(
                ListItem(
                    user_id=DEMO_USER_ID,
                    content_id=entry.content_id,
                    content_kind=entry.kind,
                    title=entry.title,
                    genres=entry.genres,
                    added_at=now - timedelta(minutes=offset),
                )
            )
        logger.info("Seeded %d list items for %s.", len(demo_entries), DEMO_USER_ID)
    finally:
        await list_store.close()
        await catalog.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    asyncio.run(seed())
