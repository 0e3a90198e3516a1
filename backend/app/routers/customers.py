"""Customers router."""
from fastapi import APIRouter, Depends, Path, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import ValidationError
from app.models.customer import Customer, slugify
from app.routers.auth import get_current_principal
from app.routers.responses import json_payload, no_content, write_headers
from app.schemas.customer import CustomerCreate, CustomerDetail, CustomerList, CustomerUpdate
from app.schemas.pagination import SQL_INT_MAX, PaginationParams
from app.services.cache_keys import EntityKind
from app.services.cache_service import CacheService, get_cache_service
from app.services.gateway import CustomerGateway
from app.services.pagination import pagination_dependency
from app.services.scoping import (
    Principal,
    ensure_same_tenant,
    list_scoped,
    require_global_admin,
)
from app.services.serializer import serialize

router = APIRouter(prefix="/customers", tags=["customers"])
# Users embed their customer, customers embed their users.
WRITE_TAGS = [EntityKind.CUSTOMER.tag, EntityKind.USER.tag]


@router.get("", name="list_customers")
def list_customers(
    pagination: PaginationParams = Depends(pagination_dependency("customers_page_limit")),
    principal: Principal = Depends(get_current_principal),
    cache_service: CacheService = Depends(get_cache_service),
    db: Session = Depends(get_db)
):
    """List customers: all for global admins, their own for company admins."""
    payload = list_scoped(
        principal, cache_service, EntityKind.CUSTOMER, CustomerGateway(db), CustomerList, pagination
    )
    return json_payload(payload)


@router.get("/{customer_id}", name="get_customer")
def get_customer(
    customer_id: int = Path(..., le=SQL_INT_MAX),
    principal: Principal = Depends(get_current_principal),
    cache_service: CacheService = Depends(get_cache_service),
    db: Session = Depends(get_db)
):
    """Get customer details with its users."""
    # A customer is its own owner, so the check needs no lookup.
    ensure_same_tenant(principal, customer_id)
    customer = CustomerGateway(db).get_by_id(customer_id)
    return json_payload(cache_service.get_unique(EntityKind.CUSTOMER, customer, CustomerDetail))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_customer(
    body: CustomerCreate,
    request: Request,
    principal: Principal = Depends(get_current_principal),
    cache_service: CacheService = Depends(get_cache_service),
    db: Session = Depends(get_db)
):
    """Create a customer. The slug is derived from the name."""
    require_global_admin(principal)
    gateway = CustomerGateway(db)

    slug = slugify(body.name)
    if not slug:
        raise ValidationError("Invalid customer", [{"loc": ["name"], "msg": "name must contain letters or digits"}])
    if gateway.get_by_slug(slug) is not None:
        raise ValidationError("Invalid customer", [{"loc": ["name"], "msg": "this company already exists"}])

    customer = Customer(name=body.name)
    customer.compute_slug()
    customer = gateway.create(customer)
    invalidated = cache_service.invalidate(WRITE_TAGS)

    location = request.url_for("get_customer", customer_id=str(customer.id)).path
    return json_payload(
        serialize(customer, CustomerDetail),
        status.HTTP_201_CREATED,
        write_headers(invalidated, location),
    )


@router.put("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_customer(
    body: CustomerUpdate,
    customer_id: int = Path(..., le=SQL_INT_MAX),
    principal: Principal = Depends(get_current_principal),
    cache_service: CacheService = Depends(get_cache_service),
    db: Session = Depends(get_db)
):
    """Rename a customer. The slug computed at creation is kept."""
    require_global_admin(principal)
    gateway = CustomerGateway(db)
    customer = gateway.get_by_id(customer_id)
    gateway.update(customer, {"name": body.name})
    return no_content(cache_service.invalidate(WRITE_TAGS))


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    customer_id: int = Path(..., le=SQL_INT_MAX),
    principal: Principal = Depends(get_current_principal),
    cache_service: CacheService = Depends(get_cache_service),
    db: Session = Depends(get_db)
):
    """Delete a customer and, by cascade, its users."""
    require_global_admin(principal)
    gateway = CustomerGateway(db)
    gateway.delete(gateway.get_by_id(customer_id))
    return no_content(cache_service.invalidate(WRITE_TAGS))
