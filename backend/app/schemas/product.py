"""Product schemas."""
from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    """Create product request."""
    brand: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    reference: str | None = Field(None, min_length=1, max_length=255)


class ProductUpdate(BaseModel):
    """Update product request. Omitted fields are left unchanged."""
    brand: str | None = Field(None, min_length=1, max_length=255)
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    reference: str | None = Field(None, min_length=1, max_length=255)


class ProductList(BaseModel):
    """Product in list views."""
    id: int
    brand: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class ProductDetail(ProductList):
    """Product detail view."""
    description: str | None = None
    reference: str | None = None
