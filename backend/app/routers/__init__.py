"""API routers."""
from app.routers.health import router as health_router
from app.routers.auth import router as auth_router
from app.routers.customers import router as customers_router
from app.routers.users import router as users_router
from app.routers.products import router as products_router

__all__ = [
    "health_router",
    "auth_router",
    "customers_router",
    "users_router",
    "products_router",
]
