"""Tests for the Redis tag-aware cache store."""
import fakeredis

from app.services.cache import TagAwareCache


class Counter:
    """Callable returning a fixed payload and counting calls."""

    def __init__(self, payload: bytes = b"[]"):
        self.payload = payload
        self.calls = 0

    def __call__(self) -> bytes:
        self.calls += 1
        return self.payload


class StoreDuringSmembers(fakeredis.FakeRedis):
    """Runs ``on_smembers`` once, right after a tag set is read."""

    on_smembers = None

    def smembers(self, name):
        members = super().smembers(name)
        hook, self.on_smembers = self.on_smembers, None
        if hook is not None:
            hook()
        return members


class TestTagAwareCache:
    """Test get/compute, TTL, and tag invalidation."""

    def test_miss_then_hit(self, tag_cache):
        """The value is computed once, then served from Redis."""
        compute = Counter(b'[{"id": 1}]')

        first = tag_cache.get("k", compute, ["UserCache"], ttl=15)
        second = tag_cache.get("k", compute, ["UserCache"], ttl=15)

        assert first == second == b'[{"id": 1}]'
        assert compute.calls == 1

    def test_entries_expire_after_ttl(self, tag_cache, redis_client):
        tag_cache.get("k", Counter(), ["UserCache"], ttl=15)

        ttl = redis_client.ttl("test:entry:k")
        assert 0 < ttl <= 15

    def test_invalidate_tag_removes_entries(self, tag_cache):
        compute = Counter()
        tag_cache.get("a", compute, ["UserCache"], ttl=15)
        tag_cache.get("b", compute, ["UserCache", "CustomerCache"], ttl=15)

        assert tag_cache.invalidate_tags(["CustomerCache"]) is True
        tag_cache.get("a", compute, ["UserCache"], ttl=15)
        tag_cache.get("b", compute, ["UserCache", "CustomerCache"], ttl=15)

        # Only "b" carried the invalidated tag.
        assert compute.calls == 3

    def test_invalidate_unknown_tag_is_noop(self, tag_cache):
        compute = Counter()
        tag_cache.get("a", compute, ["UserCache"], ttl=15)

        assert tag_cache.invalidate_tags(["NoSuchTag"]) is True
        assert tag_cache.invalidate_tags([]) is True
        tag_cache.get("a", compute, ["UserCache"], ttl=15)

        assert compute.calls == 1

    def test_invalidate_is_idempotent(self, tag_cache):
        tag_cache.get("a", Counter(), ["UserCache"], ttl=15)

        assert tag_cache.invalidate_tags(["UserCache"]) is True
        assert tag_cache.invalidate_tags(["UserCache"]) is True

    def test_read_fails_open_when_redis_down(self, tag_cache, redis_server):
        """An unreachable Redis falls through to compute on every call."""
        redis_server.connected = False
        compute = Counter(b'[{"id": 2}]')

        assert tag_cache.get("k", compute, ["UserCache"], ttl=15) == b'[{"id": 2}]'
        assert tag_cache.get("k", compute, ["UserCache"], ttl=15) == b'[{"id": 2}]'
        assert compute.calls == 2

    def test_invalidate_reports_failure_when_redis_down(self, tag_cache, redis_server):
        redis_server.connected = False
        assert tag_cache.invalidate_tags(["UserCache"]) is False

    def test_ping(self, tag_cache, redis_server):
        assert tag_cache.ping() is True
        redis_server.connected = False
        assert tag_cache.ping() is False


class TestConcurrentInvalidation:
    """Stores and invalidations interleaving on the same tag."""

    def test_entry_tagged_during_invalidation_is_invalidated_next_time(self, redis_server):
        client = StoreDuringSmembers(server=redis_server)
        cache = TagAwareCache(client, prefix="test")
        client.on_smembers = lambda: cache.get("page1", lambda: b"v1", ["UserCache"], ttl=15)

        assert cache.invalidate_tags(["UserCache"]) is True
        assert cache.get("page1", lambda: b"v2", ["UserCache"], ttl=15) == b"v1"

        assert cache.invalidate_tags(["UserCache"]) is True
        assert cache.get("page1", lambda: b"v2", ["UserCache"], ttl=15) == b"v2"

    def test_value_computed_across_an_invalidation_is_not_stored(self, tag_cache):
        """A read that started before a write's invalidation does not cache its result."""
        def stale_read():
            tag_cache.invalidate_tags(["ProductCache"])
            return b"stale"

        assert tag_cache.get("p", stale_read, ["ProductCache"], ttl=15) == b"stale"
        assert tag_cache.get("p", lambda: b"fresh", ["ProductCache"], ttl=15) == b"fresh"

    def test_untouched_tag_still_stores(self, tag_cache):
        compute = Counter()
        tag_cache.invalidate_tags(["UserCache"])

        tag_cache.get("p", compute, ["ProductCache"], ttl=15)
        tag_cache.get("p", compute, ["ProductCache"], ttl=15)

        assert compute.calls == 1
