"""Users router, scoped to the caller's customer for company admins."""
from fastapi import APIRouter, Depends, Path, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import NotFound, Unauthorized, ValidationError
from app.models.user import User, UserRole
from app.routers.auth import get_current_principal, get_password_hash
from app.routers.responses import json_payload, no_content, write_headers
from app.schemas.pagination import SQL_INT_MAX, PaginationParams
from app.schemas.user import UserCreate, UserDetail, UserList, UserUpdate
from app.services.cache_keys import EntityKind
from app.services.cache_service import CacheService, get_cache_service
from app.services.gateway import CustomerGateway, UserGateway
from app.services.pagination import pagination_dependency
from app.services.scoping import (
    AccessScope,
    Principal,
    ensure_same_tenant,
    list_scoped,
    resolve_scope,
)
from app.services.serializer import serialize

router = APIRouter(prefix="/users", tags=["users"])
# Customer detail embeds its users.
WRITE_TAGS = [EntityKind.USER.tag, EntityKind.CUSTOMER.tag]


def _invalid(field: str, msg: str) -> ValidationError:
    return ValidationError("Invalid user", [{"loc": [field], "msg": msg}])


def _load_scoped_user(gateway: UserGateway, principal: Principal, user_id: int) -> User:
    # Role check before the lookup: non-admins get 403, never 404.
    resolve_scope(principal)
    user = gateway.get_by_id(user_id)
    ensure_same_tenant(principal, user.owner_id)
    return user


@router.get("", name="list_users")
def list_users(
    pagination: PaginationParams = Depends(pagination_dependency("users_page_limit")),
    principal: Principal = Depends(get_current_principal),
    cache_service: CacheService = Depends(get_cache_service),
    db: Session = Depends(get_db)
):
    """List users: all for global admins, own customer's for company admins."""
    payload = list_scoped(
        principal, cache_service, EntityKind.USER, UserGateway(db), UserList, pagination
    )
    return json_payload(payload)


@router.get("/{user_id}", name="get_user")
def get_user(
    user_id: int = Path(..., le=SQL_INT_MAX),
    principal: Principal = Depends(get_current_principal),
    cache_service: CacheService = Depends(get_cache_service),
    db: Session = Depends(get_db)
):
    """Get user details."""
    user = _load_scoped_user(UserGateway(db), principal, user_id)
    return json_payload(cache_service.get_unique(EntityKind.USER, user, UserDetail))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    request: Request,
    principal: Principal = Depends(get_current_principal),
    cache_service: CacheService = Depends(get_cache_service),
    db: Session = Depends(get_db)
):
    """Create a user in the caller's customer (global admins pick one)."""
    gateway = UserGateway(db)
    if resolve_scope(principal) is AccessScope.GLOBAL:
        if body.customer_id is None:
            raise _invalid("customer_id", "customer_id is required")
        customer_id = body.customer_id
    else:
        if body.customer_id is not None and body.customer_id != principal.customer_id:
            raise Unauthorized()
        customer_id = principal.customer_id

    try:
        CustomerGateway(db).get_by_id(customer_id)
    except NotFound:
        raise _invalid("customer_id", "Customer not found")
    if gateway.get_by_username(body.username) is not None:
        raise _invalid("username", "this user already exists, please choose another username")

    user = User(
        customer_id=customer_id,
        username=body.username,
        email=body.email,
        hashed_password=get_password_hash(body.password),
        roles=[body.roles or UserRole.TENANT_USER.value],
    )
    user = gateway.create(user)
    invalidated = cache_service.invalidate(WRITE_TAGS)

    location = request.url_for("get_user", user_id=str(user.id)).path
    return json_payload(
        serialize(user, UserDetail),
        status.HTTP_201_CREATED,
        write_headers(invalidated, location),
    )


@router.put("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_user(
    body: UserUpdate,
    user_id: int = Path(..., le=SQL_INT_MAX),
    principal: Principal = Depends(get_current_principal),
    cache_service: CacheService = Depends(get_cache_service),
    db: Session = Depends(get_db)
):
    """Update a user. Omitted fields are left unchanged."""
    gateway = UserGateway(db)
    user = _load_scoped_user(gateway, principal, user_id)

    update_data = body.model_dump(exclude_unset=True, exclude_none=True)
    if "username" in update_data and update_data["username"] != user.username:
        if gateway.get_by_username(update_data["username"]) is not None:
            raise _invalid("username", "this user already exists, please choose another username")
    if "roles" in update_data:
        update_data["roles"] = [update_data["roles"]]
    if "password" in update_data:
        update_data["hashed_password"] = get_password_hash(update_data.pop("password"))

    gateway.update(user, update_data)
    return no_content(cache_service.invalidate(WRITE_TAGS))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int = Path(..., le=SQL_INT_MAX),
    principal: Principal = Depends(get_current_principal),
    cache_service: CacheService = Depends(get_cache_service),
    db: Session = Depends(get_db)
):
    """Delete a user."""
    gateway = UserGateway(db)
    user = _load_scoped_user(gateway, principal, user_id)
    if user.id == principal.id:
        raise ValidationError("Cannot delete yourself")

    gateway.delete(user)
    return no_content(cache_service.invalidate(WRITE_TAGS))
