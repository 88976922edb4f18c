from application.my_list.my_list_service import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    MyListService,
    build_cache_key,
)

__all__ = ["DEFAULT_LIMIT", "MAX_LIMIT", "MyListService", "build_cache_key"]
