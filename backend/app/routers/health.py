"""Health check router."""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.cache_service import CacheService, get_cache_service

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/ready")
def readiness_check(
    db: Session = Depends(get_db),
    cache_service: CacheService = Depends(get_cache_service),
):
    """Readiness check (DB + Redis connectivity). Redis down only degrades."""
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        database = "unavailable"
    redis_status = "ok" if cache_service.cache.ping() else "unavailable"
    status = "ready" if database == "ok" else "not_ready"
    return {"status": status, "checks": {"database": database, "redis": redis_status}}
