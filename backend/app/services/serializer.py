"""JSON serialization through pydantic view models.

A view model decides which attributes are visible: list views omit the
relations that detail views include.
"""
from functools import lru_cache
from typing import Any, List, Type

from pydantic import BaseModel, TypeAdapter


@lru_cache(maxsize=None)
def _list_adapter(view: Type[BaseModel]) -> TypeAdapter:
    return TypeAdapter(List[view])


def serialize(data: Any, view: Type[BaseModel]) -> bytes:
    """Serialize an ORM entity or a list of entities as JSON bytes."""
    if isinstance(data, (list, tuple)):
        adapter = _list_adapter(view)
        return adapter.dump_json(adapter.validate_python(list(data), from_attributes=True))
    return view.model_validate(data, from_attributes=True).model_dump_json().encode("utf-8")
