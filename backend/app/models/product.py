"""Product model for the shared catalog."""
from sqlalchemy import Column, Integer, String, Text

from app.database import Base


class Product(Base):
    """Catalog item visible to every customer."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    brand = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    reference = Column(String(255), nullable=True)

    @property
    def owner_id(self) -> None:
        return None
