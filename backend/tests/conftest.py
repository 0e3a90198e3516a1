"""Pytest configuration and fixtures."""
import os

# Must be set before app modules read settings.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.database import Base, get_db
from app.models import Customer, Product, User, UserRole
from app.routers.auth import token_for_user
from app.services.cache import TagAwareCache
from app.services.cache_service import CacheService, get_cache_service


@pytest.fixture(scope="session")
def settings():
    """Test settings."""
    return Settings(
        database_url="sqlite://",
        redis_url="redis://localhost:6379/0",
        secret_key="test-secret-key",
        debug=True,
    )


@pytest.fixture(scope="function")
def session_factory(settings):
    """Session factory bound to a fresh in-memory database."""
    engine = create_engine(
        settings.database_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(session_factory):
    """Create a test database session."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def redis_server():
    """Isolated fake Redis server; set ``connected = False`` to simulate an outage."""
    return fakeredis.FakeServer()


@pytest.fixture
def redis_client(redis_server):
    return fakeredis.FakeRedis(server=redis_server)


@pytest.fixture
def tag_cache(redis_client):
    return TagAwareCache(redis_client, prefix="test")


@pytest.fixture
def cache_service(tag_cache):
    return CacheService(tag_cache, ttl=15)


@pytest.fixture
def client(session_factory, cache_service):
    """API client using the test database and fake Redis."""
    from app.main import app as api

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    api.dependency_overrides[get_db] = override_get_db
    api.dependency_overrides[get_cache_service] = lambda: cache_service
    yield TestClient(api)
    api.dependency_overrides.clear()


@pytest.fixture
def make_customer(db_session):
    """Factory for persisted customers."""
    def _make(name: str) -> Customer:
        customer = Customer(name=name)
        customer.compute_slug()
        db_session.add(customer)
        db_session.commit()
        db_session.refresh(customer)
        return customer
    return _make


@pytest.fixture
def make_user(db_session):
    """Factory for persisted users (password hashing skipped)."""
    def _make(username: str, roles=None, customer: Customer | None = None) -> User:
        user = User(
            username=username,
            email=f"{username}@example.com",
            hashed_password="not-a-real-hash",
            roles=roles or [UserRole.TENANT_USER.value],
            customer_id=customer.id if customer else None,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make


@pytest.fixture
def make_product(db_session):
    """Factory for persisted products."""
    def _make(brand: str, name: str, **extra) -> Product:
        product = Product(brand=brand, name=name, **extra)
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product
    return _make


@pytest.fixture
def auth_headers():
    """Build a bearer header for a user."""
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {token_for_user(user)}"}
    return _headers


@pytest.fixture
def global_admin(make_user):
    return make_user("rootadmin", roles=[UserRole.GLOBAL_ADMIN.value])


@pytest.fixture
def acme(make_customer):
    return make_customer("Acme Corp")


@pytest.fixture
def globex(make_customer):
    return make_customer("Globex")


@pytest.fixture
def acme_admin(make_user, acme):
    return make_user("acmeadmin", roles=[UserRole.TENANT_ADMIN.value], customer=acme)


@pytest.fixture
def globex_admin(make_user, globex):
    return make_user("globexadmin", roles=[UserRole.TENANT_ADMIN.value], customer=globex)
