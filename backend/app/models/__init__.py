"""Database models."""
from app.models.customer import Customer
from app.models.user import User, UserRole
from app.models.product import Product

__all__ = [
    "Customer",
    "User",
    "UserRole",
    "Product",
]
