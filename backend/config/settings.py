import os

from dotenv import load_dotenv

# Service-side settings: HTTP/runtime switches and My List tuning.
# Infrastructure modules never read these directly; values are passed in
# explicitly by `server/api/rest/dependencies.py`.
load_dotenv(override=True)


def _get_env_int(key: str, default: int) -> int:
    """Read an integer env var, falling back to `default` when unset."""
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"env var {key} must be an integer, got {raw}") from exc


def _get_env_bool(key: str, default: bool) -> bool:
    """Read a boolean env var (true/false/1/0/yes/no/on/off)."""
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    return raw.lower() in {"1", "true", "y", "yes", "on"}


def _get_env_float(key: str, default: float) -> float:
    """Read a float env var, falling back to `default` when unset."""
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"env var {key} must be a number, got {raw}") from exc


# ===== FastAPI / Uvicorn =====

SERVER_HOST = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT = _get_env_int("SERVER_PORT", 8080)
SERVER_RELOAD = _get_env_bool("SERVER_RELOAD", False)
SERVER_LOG_LEVEL = os.getenv("SERVER_LOG_LEVEL", "info")

# The list cache is per-process, so more workers means more (independent) caches.
SERVER_WORKERS = _get_env_int("SERVER_WORKERS", 1) or 1

UVICORN_CONFIG = {
    "host": SERVER_HOST,
    "port": SERVER_PORT,
    "reload": SERVER_RELOAD,
    "log_level": SERVER_LOG_LEVEL,
    "workers": SERVER_WORKERS,
}

# ===== My List =====

MY_LIST_CACHE_BACKEND = os.getenv("MY_LIST_CACHE_BACKEND", "memory")
# 0 disables expiry (entries only leave via LRU eviction or invalidation).
MY_LIST_CACHE_TTL_SECONDS = _get_env_float("MY_LIST_CACHE_TTL_SECONDS", 30.0)
MY_LIST_CACHE_MAX_ITEMS = _get_env_int("MY_LIST_CACHE_MAX_ITEMS", 10_000)

MY_LIST_DEFAULT_LIMIT = _get_env_int("MY_LIST_DEFAULT_LIMIT", 20)
MY_LIST_MAX_LIMIT = _get_env_int("MY_LIST_MAX_LIMIT", 100)

if MY_LIST_CACHE_TTL_SECONDS < 0:
    raise ValueError("MY_LIST_CACHE_TTL_SECONDS must be >= 0")
if MY_LIST_CACHE_MAX_ITEMS <= 0:
    raise ValueError("MY_LIST_CACHE_MAX_ITEMS must be > 0")
if not 1 <= MY_LIST_DEFAULT_LIMIT <= MY_LIST_MAX_LIMIT:
    raise ValueError("MY_LIST_DEFAULT_LIMIT must be between 1 and MY_LIST_MAX_LIMIT")
