"""User schemas."""
from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.schemas.pagination import SQL_INT_MAX

AssignableRole = Literal["ROLE_USER", "ROLE_COMPANY_ADMIN"]


def _check_password_strength(value: str) -> str:
    if not any(c.isalpha() for c in value) or not any(c.isdigit() for c in value):
        raise ValueError("the password is too weak")
    return value


class UserCreate(BaseModel):
    """Create user request.

    ``customer_id`` is honored only for global admins; company admins always
    create users in their own customer.
    """
    username: str = Field(..., min_length=5, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    roles: AssignableRole | None = None
    customer_id: int | None = Field(None, ge=1, le=SQL_INT_MAX)

    @field_validator("password")
    @classmethod
    def strong_password(cls, value: str) -> str:
        return _check_password_strength(value)


class UserUpdate(BaseModel):
    """Update user request. Omitted fields are left unchanged."""
    username: str | None = Field(None, min_length=5, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=8, max_length=128)
    roles: AssignableRole | None = None

    @field_validator("password")
    @classmethod
    def strong_password(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return _check_password_strength(value)


class CustomerRef(BaseModel):
    """Customer as embedded in user views."""
    id: int
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class UserList(BaseModel):
    """User in list views."""
    id: int
    username: str
    email: str
    customer: CustomerRef | None = None

    model_config = ConfigDict(from_attributes=True)


class UserDetail(UserList):
    """User detail view."""
    roles: List[str]
    created_at: datetime
