"""Products router: shared catalog, writes reserved to global admins."""
from fastapi import APIRouter, Depends, Path, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.product import Product
from app.routers.auth import get_current_principal
from app.routers.responses import json_payload, no_content, write_headers
from app.schemas.pagination import SQL_INT_MAX, FilterParams, PaginationParams
from app.schemas.product import ProductCreate, ProductDetail, ProductList, ProductUpdate
from app.services.cache_keys import EntityKind
from app.services.cache_service import CacheService, get_cache_service
from app.services.gateway import ProductGateway
from app.services.pagination import filter_dependency, pagination_dependency
from app.services.scoping import Principal, require_global_admin
from app.services.serializer import serialize

router = APIRouter(prefix="/products", tags=["products"])

WRITE_TAGS = [EntityKind.PRODUCT.tag]


@router.get("", name="list_products")
def list_products(
    pagination: PaginationParams = Depends(pagination_dependency("products_page_limit")),
    filters: FilterParams = Depends(filter_dependency),
    principal: Principal = Depends(get_current_principal),
    cache_service: CacheService = Depends(get_cache_service),
    db: Session = Depends(get_db)
):
    """List products, optionally restricted to one brand."""
    payload = cache_service.get_filtered(
        EntityKind.PRODUCT, ProductGateway(db), ProductList, filters, pagination
    )
    return json_payload(payload)


@router.get("/{product_id}", name="get_product")
def get_product(
    product_id: int = Path(..., le=SQL_INT_MAX),
    principal: Principal = Depends(get_current_principal),
    cache_service: CacheService = Depends(get_cache_service),
    db: Session = Depends(get_db)
):
    """Get product details."""
    product = ProductGateway(db).get_by_id(product_id)
    return json_payload(cache_service.get_unique(EntityKind.PRODUCT, product, ProductDetail))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    request: Request,
    principal: Principal = Depends(get_current_principal),
    cache_service: CacheService = Depends(get_cache_service),
    db: Session = Depends(get_db)
):
    """Create a product."""
    require_global_admin(principal)
    product = ProductGateway(db).create(Product(**body.model_dump()))
    invalidated = cache_service.invalidate(WRITE_TAGS)

    location = request.url_for("get_product", product_id=str(product.id)).path
    return json_payload(
        serialize(product, ProductDetail),
        status.HTTP_201_CREATED,
        write_headers(invalidated, location),
    )


@router.put("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_product(
    body: ProductUpdate,
    product_id: int = Path(..., le=SQL_INT_MAX),
    principal: Principal = Depends(get_current_principal),
    cache_service: CacheService = Depends(get_cache_service),
    db: Session = Depends(get_db)
):
    """Update a product. Omitted fields are left unchanged."""
    require_global_admin(principal)
    gateway = ProductGateway(db)
    product = gateway.get_by_id(product_id)
    gateway.update(product, body.model_dump(exclude_unset=True, exclude_none=True))
    return no_content(cache_service.invalidate(WRITE_TAGS))


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int = Path(..., le=SQL_INT_MAX),
    principal: Principal = Depends(get_current_principal),
    cache_service: CacheService = Depends(get_cache_service),
    db: Session = Depends(get_db)
):
    """Delete a product."""
    require_global_admin(principal)
    gateway = ProductGateway(db)
    gateway.delete(gateway.get_by_id(product_id))
    return no_content(cache_service.invalidate(WRITE_TAGS))
