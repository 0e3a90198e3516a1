"""User model with role list and customer ownership."""
from datetime import datetime
from enum import Enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from app.database import Base


class UserRole(str, Enum):
    """Stored role names."""
    GLOBAL_ADMIN = "ROLE_ADMIN"
    TENANT_ADMIN = "ROLE_COMPANY_ADMIN"
    TENANT_USER = "ROLE_USER"


def default_roles() -> list[str]:
    return [UserRole.TENANT_USER.value]


class User(Base):
    """User belonging to a customer."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(
        Integer,
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    username = Column(String(255), nullable=False, unique=True)
    email = Column(String(255), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    roles = Column(JSON, nullable=False, default=default_roles)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    customer = relationship("Customer", back_populates="users")

    @property
    def owner_id(self) -> int | None:
        return self.customer_id
