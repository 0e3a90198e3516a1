"""Cache key and tag builders. Single place for key format.

Keys are pure functions of their inputs. Free-text components (brand
filters) are percent-encoded so they cannot contain the separator.
"""
from enum import Enum
from urllib.parse import quote

KEY_SEP = ":"
EMPTY = "-"


class EntityKind(str, Enum):
    """Cacheable entity kinds and their invalidation tags."""
    CUSTOMER = "Customer"
    USER = "User"
    PRODUCT = "Product"

    @property
    def tag(self) -> str:
        return f"{self.value}Cache"


class AccessStrategy(str, Enum):
    """How a listing was scoped."""
    GLOBAL = "global"
    OWNER = "owner"
    FILTER = "filter"


def _component(value) -> str:
    if value is None:
        return EMPTY
    return quote(str(value), safe="")


def item_key(kind: EntityKind, entity_id: int) -> str:
    """Key for a single serialized entity."""
    return KEY_SEP.join([kind.value, "item", _component(entity_id)])


def list_key(
    kind: EntityKind,
    strategy: AccessStrategy,
    page: int,
    limit: int,
    scope_id: int | None = None,
    brand: str | None = None,
) -> str:
    """Key for one page of a listing.

    ``scope_id`` is required for owner-scoped listings so tenants never share
    a slot.
    """
    if strategy is AccessStrategy.OWNER and scope_id is None:
        raise ValueError("Owner-scoped cache keys need a scope id")
    return KEY_SEP.join([
        "getAll",
        kind.value,
        strategy.value,
        _component(scope_id),
        _component(brand),
        str(page),
        str(limit),
    ])


def brand_tag(kind: EntityKind, brand: str) -> str:
    """Finer-grained tag for one brand's filtered listings."""
    return KEY_SEP.join([kind.tag, "brand", _component(brand)])
