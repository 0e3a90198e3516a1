"""Pagination and filter parameter handling shared by list endpoints."""
from fastapi import Query
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Query as SAQuery

from app.config import get_settings
from app.exceptions import ValidationError
from app.schemas.pagination import SQL_INT_MAX, PaginationParams, FilterParams


def build_pagination(page: int | None, limit: int | None, default_limit: int) -> PaginationParams:
    """Validate raw page/limit values.

    Defaults apply only to omitted values; a present but non-positive value
    is rejected.
    """
    values = {"page": 1 if page is None else page}
    values["limit"] = default_limit if limit is None else limit
    try:
        params = PaginationParams(**values)
    except PydanticValidationError as e:
        raise ValidationError("Invalid pagination parameters", e.errors(include_url=False))

    max_limit = get_settings().max_page_limit
    if params.limit > max_limit:
        raise ValidationError(
            "Invalid pagination parameters",
            [{"loc": ["limit"], "msg": f"limit must be at most {max_limit}", "type": "less_than_equal"}],
        )
    if params.offset > SQL_INT_MAX:
        raise ValidationError(
            "Invalid pagination parameters",
            [{"loc": ["page"], "msg": "page is out of range", "type": "less_than_equal"}],
        )
    return params


def pagination_dependency(default_limit_setting: str):
    """Dependency factory reading ``page``/``limit`` with a per-collection default.

    ``default_limit_setting`` names the Settings attribute holding the default.
    """
    def dependency(
        page: int | None = Query(None, description="Page to reach"),
        limit: int | None = Query(None, description="Number of items by page"),
    ) -> PaginationParams:
        default_limit = getattr(get_settings(), default_limit_setting)
        return build_pagination(page, limit, default_limit)
    return dependency


def filter_dependency(
    brand: str | None = Query(None, description="Restrict products to one brand"),
) -> FilterParams:
    """Validate the optional brand filter."""
    try:
        return FilterParams(brand=brand)
    except PydanticValidationError as e:
        raise ValidationError("Invalid filter parameters", e.errors(include_url=False))


def paginate(query: SAQuery, params: PaginationParams) -> SAQuery:
    """Apply offset/limit for the requested page."""
    return query.offset(params.offset).limit(params.limit)
