import sys
import threading
import unittest
from pathlib import Path

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))

from infrastructure.cache.list_cache import InMemoryTTLCache, build_list_cache


class _FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestInMemoryTTLCache(unittest.TestCase):
    def test_lru_eviction(self) -> None:
        cache = InMemoryTTLCache(ttl_seconds=30, max_items=2)

        cache.set("k1", "v1")
        cache.set("k2", "v2")
        cache.set("k3", "v3")  # evict k1

        self.assertEqual(len(cache), 2)
        self.assertIsNone(cache.get("k1"))
        self.assertEqual(cache.get("k2"), "v2")
        self.assertEqual(cache.get("k3"), "v3")

    def test_bound_after_max_plus_one_inserts(self) -> None:
        cache = InMemoryTTLCache(ttl_seconds=0, max_items=5)
        for i in range(6):
            cache.set(f"k{i}", i)

        self.assertEqual(len(cache), 5)
        self.assertIsNone(cache.get("k0"))
        for i in range(1, 6):
            self.assertEqual(cache.get(f"k{i}"), i)

    def test_get_refreshes_recency(self) -> None:
        cache = InMemoryTTLCache(ttl_seconds=30, max_items=2)
        cache.set("k1", "v1")
        cache.set("k2", "v2")
        self.assertEqual(cache.get("k1"), "v1")  # k2 is now least recently used

        cache.set("k3", "v3")

        self.assertIsNone(cache.get("k2"))
        self.assertEqual(cache.get("k1"), "v1")
        self.assertEqual(cache.get("k3"), "v3")

    def test_overwrite_does_not_evict(self) -> None:
        cache = InMemoryTTLCache(ttl_seconds=30, max_items=2)
        cache.set("k1", "v1")
        cache.set("k2", "v2")
        cache.set("k1", "v1b")

        self.assertEqual(len(cache), 2)
        self.assertEqual(cache.get("k1"), "v1b")
        self.assertEqual(cache.get("k2"), "v2")

    def test_ttl_expiration(self) -> None:
        clock = _FakeClock()
        cache = InMemoryTTLCache(ttl_seconds=10, max_items=10, clock=clock)
        cache.set("k1", "v1")

        clock.now += 9.999
        self.assertEqual(cache.get("k1"), "v1")

        clock.now += 0.002
        self.assertIsNone(cache.get("k1"))
        # Expired entries are dropped on read.
        self.assertEqual(len(cache), 0)

    def test_set_recomputes_expiry(self) -> None:
        clock = _FakeClock()
        cache = InMemoryTTLCache(ttl_seconds=10, max_items=10, clock=clock)
        cache.set("k1", "v1")
        clock.now += 8
        cache.set("k1", "v2")
        clock.now += 8

        self.assertEqual(cache.get("k1"), "v2")

    def test_zero_ttl_never_expires(self) -> None:
        clock = _FakeClock()
        cache = InMemoryTTLCache(ttl_seconds=0, max_items=10, clock=clock)
        cache.set("k1", "v1")
        clock.now += 10**9

        self.assertEqual(cache.get("k1"), "v1")

    def test_delete_and_clear(self) -> None:
        cache = InMemoryTTLCache(ttl_seconds=30, max_items=10)
        cache.set("k1", "v1")
        cache.set("k2", "v2")

        self.assertTrue(cache.delete("k1"))
        self.assertFalse(cache.delete("k1"))
        self.assertIsNone(cache.get("k1"))

        cache.clear()
        self.assertEqual(len(cache), 0)
        self.assertIsNone(cache.get("k2"))

    def test_clear_resets_recency_counter(self) -> None:
        cache = InMemoryTTLCache(ttl_seconds=0, max_items=2)
        for i in range(10):
            cache.set(f"old{i}", i)
        cache.clear()

        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)

        self.assertIsNone(cache.get("a"))
        self.assertEqual(cache._access_counter, 3)

    def test_cleanup_expired(self) -> None:
        clock = _FakeClock()
        cache = InMemoryTTLCache(ttl_seconds=5, max_items=10, clock=clock)
        cache.set("k1", "v1")
        clock.now += 3
        cache.set("k2", "v2")
        clock.now += 3

        self.assertEqual(cache.cleanup_expired(), 1)
        self.assertEqual(len(cache), 1)
        self.assertEqual(cache.get("k2"), "v2")

    def test_concurrent_access_keeps_bound(self) -> None:
        cache = InMemoryTTLCache(ttl_seconds=30, max_items=8)
        errors: list[BaseException] = []
        start = threading.Barrier(6)

        def worker(tid: int, with_clear: bool) -> None:
            try:
                start.wait()
                for i in range(2000):
                    key = f"t{tid}-k{i % 50}"
                    cache.set(key, i)
                    cache.get(key)
                    cache.get(f"t{(tid + 1) % 6}-k{i % 50}")
                    if i % 7 == 0:
                        cache.delete(f"t{tid}-k{(i + 3) % 50}")
                    if with_clear and i % 97 == 0:
                        cache.clear()
                    if len(cache) > 8:
                        raise AssertionError(f"cache grew to {len(cache)}")
            except BaseException as exc:  # collected and asserted below
                errors.append(exc)

        previous = sys.getswitchinterval()
        sys.setswitchinterval(1e-6)
        try:
            threads = [threading.Thread(target=worker, args=(t, t == 0)) for t in range(6)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()
        finally:
            sys.setswitchinterval(previous)

        self.assertEqual(errors, [])
        self.assertLessEqual(len(cache), 8)

    def test_concurrent_sets_fill_exactly_to_bound(self) -> None:
        cache = InMemoryTTLCache(ttl_seconds=0, max_items=16)
        start = threading.Barrier(4)

        def worker(tid: int) -> None:
            start.wait()
            for i in range(500):
                cache.set(f"t{tid}-{i}", i)

        threads = [threading.Thread(target=worker, args=(t,)) for t in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # Every set either added a key under the bound or evicted exactly one.
        self.assertEqual(len(cache), 16)
        self.assertEqual(cache._access_counter, 2000)

    def test_invalid_config(self) -> None:
        with self.assertRaises(ValueError):
            InMemoryTTLCache(ttl_seconds=-1, max_items=10)
        with self.assertRaises(ValueError):
            InMemoryTTLCache(ttl_seconds=1, max_items=0)

    def test_builder(self) -> None:
        cache = build_list_cache(backend="memory", ttl_seconds=12, max_items=3)
        self.assertIsInstance(cache, InMemoryTTLCache)
        self.assertEqual(cache.ttl_seconds, 12)
        self.assertEqual(cache.max_items, 3)

        with self.assertRaises(ValueError):
            build_list_cache(backend="redis")


if __name__ == "__main__":
    unittest.main()
