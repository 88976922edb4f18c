from infrastructure.cache.list_cache import InMemoryTTLCache, build_list_cache

__all__ = ["InMemoryTTLCache", "build_list_cache"]
