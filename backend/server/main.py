import logging
import time

import uvicorn
from fastapi import FastAPI, Request

from config.settings import SERVER_LOG_LEVEL, UVICORN_CONFIG
from server.api.rest.dependencies import shutdown_dependencies
from server.api.rest.error_handlers import register_error_handlers
from server.api_router import api_router

logging.basicConfig(
    level=SERVER_LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="My List Service", description="Per-user My List API with cursor pagination")

register_error_handlers(app)
app.include_router(api_router)

_UNLOGGED_PATHS = {"/health"}


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        # The 500 body is rendered further out; record the failure here.
        logger.error(
            "%s %s -> unhandled error (%.1fms)",
            request.method,
            request.url.path,
            (time.perf_counter() - started) * 1000,
        )
        raise
    if request.url.path in _UNLOGGED_PATHS:
        return response
    elapsed_ms = (time.perf_counter() - started) * 1000
    if response.status_code >= 500:
        level = logging.ERROR
    elif response.status_code >= 400:
        level = logging.WARNING
    else:
        level = logging.INFO
    logger.log(
        level,
        "%s %s -> %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.on_event("shutdown")
async def shutdown_event():
    """Release stores and the list cache when the app stops."""
    await shutdown_dependencies()


if __name__ == "__main__":
    uvicorn.run("server.main:app", **UVICORN_CONFIG)
