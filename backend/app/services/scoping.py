"""Authorization scoping: which rows a principal may see or change.

The principal is always passed in explicitly; nothing here looks up the
current request.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Type

from pydantic import BaseModel

from app.exceptions import Forbidden, PreconditionViolation, Unauthorized
from app.models.user import UserRole
from app.schemas.pagination import PaginationParams
from app.services.cache_keys import EntityKind
from app.services.cache_service import CacheService
from app.services.gateway import EntityGateway

logger = logging.getLogger(__name__)


class AccessScope(str, Enum):
    """Data partition selected for a request."""
    GLOBAL = "global"
    TENANT = "tenant"


@dataclass(frozen=True)
class Principal:
    """Authenticated caller, fixed for the duration of a request."""
    id: int
    username: str
    roles: FrozenSet[str] = field(default_factory=frozenset)
    customer_id: int | None = None

    @property
    def role(self) -> UserRole:
        """Highest effective role."""
        if UserRole.GLOBAL_ADMIN.value in self.roles:
            return UserRole.GLOBAL_ADMIN
        if UserRole.TENANT_ADMIN.value in self.roles:
            return UserRole.TENANT_ADMIN
        return UserRole.TENANT_USER

    @property
    def is_global_admin(self) -> bool:
        return self.role is UserRole.GLOBAL_ADMIN


def resolve_scope(principal: Principal) -> AccessScope:
    """Pick the partition for an admin principal.

    Raises:
        Forbidden: the principal is not an admin.
        PreconditionViolation: a company admin has no customer.
    """
    role = principal.role
    if role is UserRole.GLOBAL_ADMIN:
        return AccessScope.GLOBAL
    if role is UserRole.TENANT_ADMIN:
        if principal.customer_id is None:
            raise PreconditionViolation(
                f"Company admin {principal.id} has no customer assigned"
            )
        return AccessScope.TENANT
    raise Forbidden()


def require_global_admin(principal: Principal) -> None:
    if not principal.is_global_admin:
        raise Forbidden()


def ensure_same_tenant(principal: Principal, owner_id: int | None) -> None:
    """Reject access to a row owned by another customer.

    Global admins pass for any row.
    """
    if resolve_scope(principal) is AccessScope.GLOBAL:
        return
    if owner_id != principal.customer_id:
        logger.info(
            f"Principal {principal.id} (customer {principal.customer_id}) "
            f"denied access to row of customer {owner_id}"
        )
        raise Unauthorized()


def list_scoped(
    principal: Principal,
    cache_service: CacheService,
    kind: EntityKind,
    gateway: EntityGateway,
    view: Type[BaseModel],
    pagination: PaginationParams,
) -> bytes:
    """List rows of ``kind`` visible to the principal, through the cache."""
    if resolve_scope(principal) is AccessScope.GLOBAL:
        return cache_service.get_all_paged(kind, gateway, view, pagination)
    return cache_service.get_owner_scoped(
        kind, gateway, view, principal.customer_id, pagination
    )
