"""Entity lookup gateways over SQLAlchemy sessions.

Listings are ordered by id ascending so page boundaries are stable.
"""
import logging
from typing import Any, Dict, Generic, List, Type, TypeVar

from sqlalchemy.orm import Session

from app.exceptions import NotFound
from app.models.customer import Customer
from app.models.product import Product
from app.models.user import User
from app.schemas.pagination import FilterParams, PaginationParams
from app.services.pagination import paginate

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class EntityGateway(Generic[ModelT]):
    """Load and persist rows of one model."""

    model: Type[ModelT]
    resource_name: str = "Entity"

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self):
        return self.db.query(self.model).order_by(self.model.id.asc())

    def _owner_query(self, owner_id: int):
        """Rows owned by one customer.

        Products have no owner; only CustomerGateway and UserGateway override this.
        """
        raise NotImplementedError(f"{self.resource_name} has no owner")

    def _filter_query(self, filters: FilterParams):
        """Rows matching ``filters``; only ProductGateway supports filtering."""
        raise NotImplementedError(f"{self.resource_name} has no filter")

    def list_all(self, pagination: PaginationParams) -> List[ModelT]:
        return paginate(self._base_query(), pagination).all()

    def list_by_owner(self, owner_id: int, pagination: PaginationParams) -> List[ModelT]:
        return paginate(self._owner_query(owner_id), pagination).all()

    def list_by_filter(self, filters: FilterParams, pagination: PaginationParams) -> List[ModelT]:
        return paginate(self._filter_query(filters), pagination).all()

    def get_by_id(self, entity_id: int) -> ModelT:
        """Return the row or raise NotFound."""
        entity = self.db.get(self.model, entity_id)
        if entity is None:
            raise NotFound(self.resource_name, entity_id)
        return entity

    def create(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        logger.info(f"Created {self.resource_name} {entity.id}")
        return entity

    def update(self, entity: ModelT, data: Dict[str, Any]) -> ModelT:
        for field, value in data.items():
            setattr(entity, field, value)
        self.db.commit()
        self.db.refresh(entity)
        logger.info(f"Updated {self.resource_name} {entity.id}")
        return entity

    def delete(self, entity: ModelT) -> None:
        entity_id = entity.id
        self.db.delete(entity)
        self.db.commit()
        logger.info(f"Deleted {self.resource_name} {entity_id}")


class CustomerGateway(EntityGateway[Customer]):
    """Customers; a customer is owned by itself."""

    model = Customer
    resource_name = "Customer"

    def _owner_query(self, owner_id: int):
        return self._base_query().filter(Customer.id == owner_id)

    def get_by_slug(self, slug: str) -> Customer | None:
        return self.db.query(Customer).filter(Customer.slug == slug).first()


class UserGateway(EntityGateway[User]):
    """Users, owned by their customer."""

    model = User
    resource_name = "User"

    def _owner_query(self, owner_id: int):
        return self._base_query().filter(User.customer_id == owner_id)

    def get_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()


class ProductGateway(EntityGateway[Product]):
    """Products, filterable by brand."""

    model = Product
    resource_name = "Product"

    def _filter_query(self, filters: FilterParams):
        query = self._base_query()
        if filters.brand is not None:
            query = query.filter(Product.brand == filters.brand)
        return query
