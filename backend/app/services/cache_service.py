"""Cache-aside layer for list and detail payloads.

Reads return the serialized JSON payload, computing it through a gateway
on a miss. Writes call ``invalidate`` after the database commit.
"""
import logging
from functools import lru_cache
from typing import Iterable, Protocol, Type

import redis
from pydantic import BaseModel

from app.config import get_settings
from app.schemas.pagination import FilterParams, PaginationParams
from app.services.cache import TagAwareCache
from app.services.cache_keys import (
    AccessStrategy,
    EntityKind,
    brand_tag,
    item_key,
    list_key,
)
from app.services.gateway import EntityGateway
from app.services.serializer import serialize

logger = logging.getLogger(__name__)


class Cacheable(Protocol):
    """Customer, User or Product row: has an id and an optional owner."""
    id: int

    @property
    def owner_id(self) -> int | None: ...


class CacheService:
    """Memoizes serialized payloads under tagged, short-lived keys."""

    def __init__(self, cache: TagAwareCache, ttl: int = 15):
        self.cache = cache
        self.ttl = ttl

    def get_unique(self, kind: EntityKind, entity: Cacheable, view: Type[BaseModel]) -> bytes:
        """Serialized single entity, keyed by kind and id."""
        return self.cache.get(
            item_key(kind, entity.id),
            lambda: serialize(entity, view),
            [kind.tag],
            self.ttl,
        )

    def get_all_paged(
        self,
        kind: EntityKind,
        gateway: EntityGateway,
        view: Type[BaseModel],
        pagination: PaginationParams,
    ) -> bytes:
        """One page of every row of ``kind``."""
        key = list_key(kind, AccessStrategy.GLOBAL, pagination.page, pagination.limit)
        return self.cache.get(
            key,
            lambda: serialize(gateway.list_all(pagination), view),
            [kind.tag],
            self.ttl,
        )

    def get_owner_scoped(
        self,
        kind: EntityKind,
        gateway: EntityGateway,
        view: Type[BaseModel],
        owner_id: int,
        pagination: PaginationParams,
    ) -> bytes:
        """One page of the rows owned by ``owner_id``."""
        key = list_key(
            kind, AccessStrategy.OWNER, pagination.page, pagination.limit, scope_id=owner_id
        )
        return self.cache.get(
            key,
            lambda: serialize(gateway.list_by_owner(owner_id, pagination), view),
            [kind.tag],
            self.ttl,
        )

    def get_filtered(
        self,
        kind: EntityKind,
        gateway: EntityGateway,
        view: Type[BaseModel],
        filters: FilterParams,
        pagination: PaginationParams,
    ) -> bytes:
        """One page of the rows matching ``filters``; unfiltered when no brand is given."""
        if filters.brand is None:
            return self.get_all_paged(kind, gateway, view, pagination)

        key = list_key(
            kind, AccessStrategy.FILTER, pagination.page, pagination.limit, brand=filters.brand
        )
        return self.cache.get(
            key,
            lambda: serialize(gateway.list_by_filter(filters, pagination), view),
            [kind.tag, brand_tag(kind, filters.brand)],
            self.ttl,
        )

    def invalidate(self, tags: Iterable[str]) -> bool:
        """Drop every entry under ``tags``. False means entries may stay stale until TTL."""
        tags = list(tags)
        ok = self.cache.invalidate_tags(tags)
        if not ok:
            logger.warning(f"Entries tagged {tags} may be stale for up to {self.ttl}s")
        return ok


@lru_cache
def get_redis_client() -> redis.Redis:
    """Shared Redis client; connects lazily on first command."""
    settings = get_settings()
    return redis.Redis.from_url(
        settings.redis_url,
        socket_timeout=settings.cache_socket_timeout,
        socket_connect_timeout=settings.cache_socket_timeout,
    )


def get_cache_service() -> CacheService:
    """Dependency for the cache-aside layer."""
    settings = get_settings()
    return CacheService(
        TagAwareCache(get_redis_client(), prefix=settings.cache_prefix),
        ttl=settings.cache_ttl_seconds,
    )
