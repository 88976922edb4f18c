from __future__ import annotations

from fastapi import APIRouter

import server.api.rest.v1.health as health_v1
import server.api.rest.v1.my_list as my_list_v1

# Canonical API router aggregator.
api_router = APIRouter()
api_router.include_router(health_v1.router)
api_router.include_router(my_list_v1.router)

__all__ = ["api_router"]
