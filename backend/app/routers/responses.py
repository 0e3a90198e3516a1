"""Response helpers for pre-serialized JSON payloads."""
from fastapi import Response, status

from app.config import get_settings

JSON_MEDIA_TYPE = "application/json"


def json_payload(payload: bytes, status_code: int = status.HTTP_200_OK, headers: dict | None = None) -> Response:
    """Wrap already-serialized JSON bytes."""
    return Response(content=payload, status_code=status_code, media_type=JSON_MEDIA_TYPE, headers=headers)


def write_headers(invalidated: bool, location: str | None = None) -> dict:
    """Headers for a write response.

    A failed cache invalidation does not undo the write; it is reported with
    a ``Warning`` header instead.
    """
    headers = {}
    if location is not None:
        headers["Location"] = location
    if not invalidated:
        ttl = get_settings().cache_ttl_seconds
        headers["Warning"] = f'199 - "cache invalidation failed, reads may be stale for up to {ttl}s"'
    return headers


def no_content(invalidated: bool) -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=write_headers(invalidated))
