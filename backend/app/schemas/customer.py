"""Customer schemas."""
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.user import UserList


class CustomerCreate(BaseModel):
    """Create customer request."""
    name: str = Field(..., min_length=1, max_length=255)


class CustomerUpdate(CustomerCreate):
    """Update customer request (the slug is kept)."""
    pass


class CustomerList(BaseModel):
    """Customer in list views."""
    id: int
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class CustomerDetail(CustomerList):
    """Customer with its users."""
    users: List[UserList] = []
