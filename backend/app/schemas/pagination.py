"""Pagination and filter query schemas."""
from pydantic import BaseModel, Field

# Largest value an INTEGER column (and the offset derived from page) may take.
SQL_INT_MAX = 2**31 - 1


class PaginationParams(BaseModel):
    """Validated page/limit pair."""
    page: int = Field(1, ge=1, le=SQL_INT_MAX)
    limit: int = Field(3, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class FilterParams(BaseModel):
    """Optional brand restriction for product listings."""
    brand: str | None = Field(None, min_length=1, max_length=200)
