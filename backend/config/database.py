import os
from typing import Optional
from urllib.parse import urlsplit, urlunsplit


def _get_env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"env var {key} must be an integer, got {raw}") from exc


def get_postgres_dsn() -> Optional[str]:
    """Service-side accessor for the Postgres DSN (My List + catalogue).

    Returns None when Postgres is not configured, in which case the server
    wires in-memory adapters. `.env` loading is centralized in settings.py,
    so we only read environment variables here.
    """

    dsn = (os.getenv("POSTGRES_DSN") or "").strip()
    if dsn:
        return dsn

    host = (os.getenv("POSTGRES_HOST") or "").strip()
    if not host:
        return None

    port = _get_env_int("POSTGRES_PORT", 5432)
    user = os.getenv("POSTGRES_USER", "postgres")
    password = os.getenv("POSTGRES_PASSWORD", "postgres")
    db = os.getenv("POSTGRES_DB", "my_list_service")
    return f"postgresql://{user}:{password}@{host}:{port}/{db}"


def sanitize_dsn(dsn: str) -> str:
    """Mask credentials so a DSN can be logged."""
    try:
        parts = urlsplit(dsn)
        port = parts.port
    except ValueError:
        return "postgresql://***"
    if not parts.scheme or not parts.hostname:
        return "postgresql://***"
    netloc = parts.hostname
    if port:
        netloc = f"{netloc}:{port}"
    if parts.username or parts.password:
        netloc = f"***:***@{netloc}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))
