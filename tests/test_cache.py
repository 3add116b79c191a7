from services.cache import TTLCache

from conftest import FakeClock


class TestTTLCache:
    def test_missing_key_returns_none(self):
        assert TTLCache().get("today") is None

    def test_fresh_entry_is_returned(self):
        clock = FakeClock()
        cache = TTLCache(ttl_seconds=60, clock=clock)
        cache.set("today", {"title": "M31"})
        clock.advance(59.9)
        assert cache.get("today") == {"title": "M31"}

    def test_entry_goes_stale_at_ttl(self):
        clock = FakeClock()
        cache = TTLCache(ttl_seconds=60, clock=clock)
        cache.set("today", {"title": "M31"})
        clock.advance(60)
        assert cache.get("today") is None

    def test_stale_entries_are_kept_until_overwritten(self):
        clock = FakeClock()
        cache = TTLCache(ttl_seconds=60, clock=clock)
        cache.set("2020-07-14", "old")
        clock.advance(120)
        assert cache.get("2020-07-14") is None
        assert len(cache) == 1

        cache.set("2020-07-14", "new")
        assert cache.get("2020-07-14") == "new"
        assert len(cache) == 1

    def test_overwrite_restamps_entry(self):
        clock = FakeClock()
        cache = TTLCache(ttl_seconds=60, clock=clock)
        cache.set("today", "first")
        clock.advance(50)
        cache.set("today", "second")
        clock.advance(50)
        assert cache.get("today") == "second"
