from __future__ import annotations

"""
Infrastructure layer (adapters only).

Concrete implementations of the application ports: the asyncpg-backed stores
(with in-memory twins for local runs and tests) and the list read cache.
"""

__all__ = [
    "cache",
    "persistence",
]
