"""Pydantic schemas for API request/response."""
from app.schemas.pagination import PaginationParams, FilterParams
from app.schemas.customer import CustomerCreate, CustomerUpdate, CustomerList, CustomerDetail
from app.schemas.user import UserCreate, UserUpdate, UserList, UserDetail, CustomerRef
from app.schemas.product import ProductCreate, ProductUpdate, ProductList, ProductDetail

__all__ = [
    "PaginationParams", "FilterParams",
    "CustomerCreate", "CustomerUpdate", "CustomerList", "CustomerDetail",
    "UserCreate", "UserUpdate", "UserList", "UserDetail", "CustomerRef",
    "ProductCreate", "ProductUpdate", "ProductList", "ProductDetail",
]
