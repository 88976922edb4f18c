from __future__ import annotations

from typing import Optional, Protocol

from domain.my_list import CatalogEntry, ContentKind


class CatalogPort(Protocol):
    async def find_content(self, *, content_id: str, kind: ContentKind) -> Optional[CatalogEntry]:
        ...

    async def close(self) -> None:
        ...
