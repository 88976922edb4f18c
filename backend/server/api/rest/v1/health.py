from __future__ import annotations

import time
from typing import Any, Dict

from fastapi import APIRouter

router = APIRouter(tags=["health"])

_STARTED_AT = time.monotonic()


@router.get("/health")
async def health() -> Dict[str, Any]:
    return {"status": "ok", "uptime": round(time.monotonic() - _STARTED_AT, 3)}
