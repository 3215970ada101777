import os
import sys
from decimal import Decimal
from pathlib import Path

import pytest
import anyio
import httpx
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

os.environ.setdefault("DATABASE_URL", "sqlite:///" + str(BASE_DIR / "test.db"))
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("ACCESS_TOKEN_EXPIRE_MINUTES", "30")
os.environ.setdefault("PASSWORD_HASHING_ROUNDS", "4")
os.environ.setdefault("DEFAULT_ADMIN_PASSWORD", "")

from app.core.config import get_settings
from app.core import db as db_module
from app.core.dependencies import get_db
from app.core.security import create_access_token, create_password_hash
from app.models import Base, Category, Product, User, UserRole
from app.main import app

get_settings.cache_clear()

db_module._engine = None
db_module._SessionLocal = None
_db_path = BASE_DIR / "test.db"


def _create_engine():
    settings = get_settings()
    connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
    return create_engine(settings.DATABASE_URL, connect_args=connect_args)


def _create_session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture(scope="session")
def engine():
    engine = _create_engine()
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if _db_path.exists():
        _db_path.unlink()


@pytest.fixture(scope="session")
def session_factory(engine):
    return _create_session_factory(engine)


@pytest.fixture(autouse=True)
def _clean_tables(engine):
    yield
    with engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def _get_test_db_factory(session_factory):
    def _get_test_db():
        db = session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    return _get_test_db


class _SyncASGIClient:
    def __init__(self, fastapi_app):
        self._client = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=fastapi_app),
            base_url="http://testserver",
        )

    def request(self, method: str, url: str, **kwargs):
        async def _do_request():
            return await self._client.request(method, url, **kwargs)

        return anyio.run(_do_request)

    def get(self, url: str, **kwargs):
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs):
        return self.request("POST", url, **kwargs)

    def put(self, url: str, **kwargs):
        return self.request("PUT", url, **kwargs)

    def delete(self, url: str, **kwargs):
        return self.request("DELETE", url, **kwargs)

    def close(self):
        async def _do_close():
            await self._client.aclose()

        anyio.run(_do_close)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


@pytest.fixture()
def client(session_factory):
    app.dependency_overrides[get_db] = _get_test_db_factory(session_factory)

    with _SyncASGIClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(session_factory):
    """Persist a user and return ``(user, auth_headers)``."""

    def _make_user(username: str, role: UserRole = UserRole.USER, user_id: int | None = None):
        session = session_factory()
        try:
            user = User(
                username=username,
                password_hash=create_password_hash("secret123"),
                role=role,
            )
            if user_id is not None:
                user.id = user_id
            session.add(user)
            session.commit()
            session.refresh(user)
        finally:
            session.close()
        token = create_access_token(subject=user.id, role=user.role.value)
        return user, {"Authorization": f"Bearer {token}"}

    return _make_user


@pytest.fixture()
def admin_headers(make_user):
    _, headers = make_user("admin", role=UserRole.ADMIN)
    return headers


@pytest.fixture()
def user_headers(make_user):
    _, headers = make_user("shopper")
    return headers


@pytest.fixture()
def seeded_catalog(session_factory):
    """Two categories, Electronics with two products and Fitness with none."""

    session = session_factory()
    try:
        electronics = Category(name="Electronics", description="Explore the latest gadgets")
        fitness = Category(name="Fitness", description="Gear for staying active")
        session.add_all([electronics, fitness])
        session.flush()
        session.add_all(
            [
                Product(
                    product_id=42,
                    name="Smartphone",
                    price=Decimal("499.99"),
                    category_id=electronics.id,
                    description="A powerful smartphone",
                    subcategory="Black",
                    stock=50,
                    featured=True,
                    image_url="smartphone.jpg",
                ),
                Product(
                    product_id=99,
                    name="Headphones",
                    price=Decimal("19.95"),
                    category_id=electronics.id,
                    description="Wireless headphones",
                    subcategory="White",
                    stock=10,
                    featured=False,
                    image_url="headphones.jpg",
                ),
            ]
        )
        session.commit()
        return {"electronics": electronics.id, "fitness": fitness.id}
    finally:
        session.close()
