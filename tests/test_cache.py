"""Tests for the TTL result cache."""

from __future__ import annotations

from fixture_browser.model.cache import CacheEntry, ResultCache
from fixture_browser.model.fixtures import decode_fixtures

from conftest import FakeClock, make_item


RESULT = decode_fixtures([make_item()])


class TestResultCache:
    def test_absent_key_is_a_miss(self, cache: ResultCache) -> None:
        assert cache.get("last-1") is None

    def test_hit_returns_stored_object(self, cache: ResultCache, clock: FakeClock) -> None:
        cache.set("last-1", RESULT)
        clock.advance(599)
        assert cache.get("last-1") is RESULT

    def test_expired_entry_reads_as_miss(self, cache: ResultCache, clock: FakeClock) -> None:
        cache.set("next-5", RESULT)
        clock.advance(600)
        assert cache.get("next-5") is None
        assert "next-5" not in cache

    def test_set_replaces_entry_and_restarts_ttl(self, cache: ResultCache, clock: FakeClock) -> None:
        cache.set("last-5", RESULT)
        clock.advance(500)
        replacement = decode_fixtures([make_item(goals_home=0)])
        cache.set("last-5", replacement)
        clock.advance(500)
        assert cache.get("last-5") is replacement

    def test_empty_result_is_cached(self, cache: ResultCache) -> None:
        cache.set("next-1", ())
        assert cache.get("next-1") == ()

    def test_unread_entries_purged_after_interval(self, cache: ResultCache, clock: FakeClock) -> None:
        cache.set("last-1", RESULT)
        cache.set("next-1", RESULT)
        clock.advance(899)
        cache.set("next-5", RESULT)
        assert len(cache) == 3

        clock.advance(1)
        cache.get("last-5")
        # the two old entries expired at 600s and the purge pass ran at 900s
        assert "last-1" not in cache
        assert "next-1" not in cache
        assert "next-5" in cache

    def test_purge_expired_reports_count(self, cache: ResultCache, clock: FakeClock) -> None:
        cache.set("last-1", RESULT)
        cache.set("last-5", RESULT)
        clock.advance(601)
        cache.set("next-1", RESULT)
        assert cache.purge_expired() == 2
        assert len(cache) == 1


class TestCacheEntry:
    def test_valid_strictly_before_deadline(self) -> None:
        entry = CacheEntry(result=RESULT, created_at=10.0, ttl=5.0)
        assert entry.is_valid(14.9)
        assert not entry.is_valid(15.0)
