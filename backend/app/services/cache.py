"""Tag-aware Redis cache store.

Each entry is a plain Redis string with a TTL. Each tag is a Redis set
holding the keys tagged with it; invalidating a tag deletes the members it
finds and removes them from the set.

Reads fail open: if Redis is unreachable the value is computed directly and
nothing is stored.
"""
import logging
from typing import Callable, Iterable

import redis

logger = logging.getLogger(__name__)


class TagAwareCache:
    """Keyed, tagged, time-bounded cache backed by Redis."""

    def __init__(self, client: redis.Redis, prefix: str = "catalog"):
        self.client = client
        self.prefix = prefix

    def _entry_key(self, key: str) -> str:
        return f"{self.prefix}:entry:{key}"

    def _tag_key(self, tag: str) -> str:
        return f"{self.prefix}:tag:{tag}"

    def _version_key(self, tag: str) -> str:
        return f"{self.prefix}:version:{tag}"

    def get(
        self,
        key: str,
        compute: Callable[[], bytes],
        tags: Iterable[str],
        ttl: int,
    ) -> bytes:
        """Return the cached value for ``key`` or compute, store and return it.

        Tag versions are read before computing. If any of them moves before
        the store, a write invalidated the tags meanwhile and the computed
        value is returned without being stored.
        """
        tags = list(tags)
        entry_key = self._entry_key(key)
        version_keys = [self._version_key(tag) for tag in tags]
        try:
            cached = self.client.get(entry_key)
            versions = None
            if cached is None and version_keys:
                versions = self.client.mget(version_keys)
        except redis.RedisError as e:
            logger.warning(f"Cache read failed for {key}, reading through: {e}")
            return compute()

        if cached is not None:
            logger.debug(f"Cache HIT: {key}")
            return cached

        logger.debug(f"Cache MISS: {key}")
        value = compute()
        self._store(entry_key, value, tags, ttl, version_keys, versions)
        return value

    def _store(
        self,
        entry_key: str,
        value: bytes,
        tags: list[str],
        ttl: int,
        version_keys: list[str],
        versions: list | None,
    ) -> None:
        try:
            with self.client.pipeline() as pipe:
                if version_keys:
                    pipe.watch(*version_keys)
                    if pipe.mget(version_keys) != versions:
                        logger.debug(f"Cache store skipped for {entry_key}: tags invalidated")
                        return
                pipe.multi()
                pipe.set(entry_key, value, ex=ttl)
                for tag in tags:
                    tag_key = self._tag_key(tag)
                    pipe.sadd(tag_key, entry_key)
                    # Tag sets live a little longer than their newest entry.
                    pipe.expire(tag_key, ttl * 2)
                pipe.execute()
        except redis.WatchError:
            logger.debug(f"Cache store skipped for {entry_key}: tags invalidated")
        except redis.RedisError as e:
            logger.warning(f"Cache write failed for {entry_key}: {e}")

    def invalidate_tags(self, tags: Iterable[str]) -> bool:
        """Delete every entry carrying any of ``tags``.

        Only the members read here are removed from each tag set, so an
        entry tagged while invalidation runs stays reachable by the next one.

        Returns False when Redis could not be reached.
        """
        tags = list(tags)
        tag_keys = [self._tag_key(tag) for tag in tags]
        if not tag_keys:
            return True
        try:
            # Bump versions first so reads already computing do not store.
            pipe = self.client.pipeline()
            for tag in tags:
                pipe.incr(self._version_key(tag))
            pipe.execute()

            members_by_tag = {tag_key: self.client.smembers(tag_key) for tag_key in tag_keys}
            members = set().union(*members_by_tag.values())
            if members:
                pipe = self.client.pipeline()
                pipe.delete(*members)
                for tag_key, tag_members in members_by_tag.items():
                    if tag_members:
                        pipe.srem(tag_key, *tag_members)
                pipe.execute()
        except redis.RedisError as e:
            logger.warning(f"Cache invalidation failed for tags {sorted(tags)}: {e}")
            return False
        logger.debug(f"Cache invalidated tags {tag_keys} ({len(members)} entries)")
        return True

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError:
            return False
