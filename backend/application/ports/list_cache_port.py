from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from domain.my_list import ListPage


@runtime_checkable
class ListCachePort(Protocol):
    def get(self, key: str) -> Optional[ListPage]: ...

    def set(self, key: str, value: ListPage) -> None: ...

    def delete(self, key: str) -> bool: ...

    def clear(self) -> None: ...
