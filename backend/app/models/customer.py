"""Customer model: the tenant that owns users."""
import re
import unicodedata

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.database import Base


def slugify(value: str) -> str:
    """Build a lower-case, URL-safe slug from a display name."""
    normalized = unicodedata.normalize("NFKD", value)
    ascii_only = normalized.encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", "-", ascii_only.lower()).strip("-")


class Customer(Base):
    """Customer organization for multi-tenant isolation."""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True)

    # Relationships
    users = relationship(
        "User",
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="User.id",
    )

    def compute_slug(self) -> None:
        """Derive the slug from the current name."""
        self.slug = slugify(self.name or "")

    @property
    def owner_id(self) -> int | None:
        """A customer is its own scope."""
        return self.id
