"""
Pytest configuration and fixtures for catalog service tests.
"""

import asyncio
import os
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import pytest
from fastapi.testclient import TestClient

# Set up test environment variables before importing anything else
os.environ.setdefault("APP_NAME", "Catalog Service Test")
os.environ.setdefault("APP_VERSION", "1.0.0")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SERVICE_NAME", "catalog-service")
os.environ.setdefault("CATALOG_SERVICE_URL", "http://testserver")
os.environ.setdefault("CATALOG_DATABASE_URL", "sqlite+aiosqlite:///catalog_test.db")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite+aiosqlite:///catalog_test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("ALGORITHM", "HS256")
os.environ.setdefault("CATEGORY_PLACEHOLDER_IMAGE", "/pharmacy-category.jpg")
os.environ.setdefault("LOG_LEVEL", "INFO")

# Import all models FIRST to ensure they're registered with SQLAlchemy
from sqlalchemy import delete, func, select

from catalog_service.app.core.database import CatalogDatabaseManager
from catalog_service.app.core.settings import get_settings
from catalog_service.app.main import app
from catalog_service.app.models.category import Category
from catalog_service.app.models.profile import Profile
from catalog_service.app.schemas.category import CategoryResponse, CategoryTreeNode
from catalog_service.app.utils.jwt_handler import JWTHandler

ADMIN_USER_ID = "admin-user"
CUSTOMER_USER_ID = "customer-user"
UNKNOWN_USER_ID = "user-without-profile"


@pytest.fixture(scope="session")
def test_database_manager(request):
    """Create test database manager with SQLite file database."""
    settings = get_settings()
    test_db_url = settings.TEST_DATABASE_URL or "sqlite+aiosqlite:///catalog_test.db"

    manager = CatalogDatabaseManager(database_url=test_db_url, echo=False)

    asyncio.run(manager.create_tables())

    # Route the app's dependencies to the test database
    import catalog_service.app.core.database as db_module

    previous_manager = db_module.database_manager
    db_module.database_manager = manager

    def cleanup():
        asyncio.run(manager.close())
        try:
            os.remove("catalog_test.db")
        except FileNotFoundError:
            pass
        db_module.database_manager = previous_manager

    request.addfinalizer(cleanup)

    return manager


async def _reset_tables(manager: CatalogDatabaseManager) -> None:
    async with manager.admin_session_maker() as session:
        await session.execute(delete(Category).where(Category.parent_id.is_not(None)))
        await session.execute(delete(Category))
        await session.execute(delete(Profile))
        session.add_all(
            [
                Profile(id=ADMIN_USER_ID, role="admin"),
                Profile(id=CUSTOMER_USER_ID, role="customer"),
            ]
        )
        await session.commit()


@pytest.fixture
def clean_database(test_database_manager):
    """Empty categories and seed one admin and one customer profile."""
    asyncio.run(_reset_tables(test_database_manager))
    return test_database_manager


@pytest.fixture
def client(clean_database) -> TestClient:
    """FastAPI test client fixture."""
    return TestClient(app)


@pytest.fixture(scope="session")
def jwt_handler() -> JWTHandler:
    settings = get_settings()
    return JWTHandler(secret_key=settings.SECRET_KEY, algorithm=settings.ALGORITHM)


@pytest.fixture
def auth_headers(jwt_handler) -> Callable[[str], Dict[str, str]]:
    """Build Authorization headers carrying a session for the given user id."""

    def _headers(user_id: str) -> Dict[str, str]:
        token = jwt_handler.encode_token({"user_id": user_id})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def admin_headers(auth_headers) -> Dict[str, str]:
    return auth_headers(ADMIN_USER_ID)


@pytest.fixture
def customer_headers(auth_headers) -> Dict[str, str]:
    return auth_headers(CUSTOMER_USER_ID)


@pytest.fixture
def count_categories(clean_database) -> Callable[[], int]:
    """Count category rows straight from the store."""

    async def _count() -> int:
        async with clean_database.admin_session_maker() as session:
            result = await session.execute(select(func.count(Category.id)))
            return result.scalar_one()

    return lambda: asyncio.run(_count())


def make_category(
    category_id: str,
    name: str,
    parent_id: Optional[str] = None,
    children: Optional[list] = None,
    **overrides: Any,
) -> CategoryTreeNode:
    """Tree node as returned by the public listing."""
    now = datetime(2024, 1, 1, 12, 0, 0)
    fields: Dict[str, Any] = {
        "id": category_id,
        "name": name,
        "slug": name.lower().replace(" ", "-"),
        "description": "",
        "parent_id": parent_id,
        "product_count": 0,
        "image": None,
        "created_at": now,
        "updated_at": now,
        "children": children or [],
    }
    fields.update(overrides)
    return CategoryTreeNode(**fields)


def make_subcategory(
    category_id: str, name: str, parent_id: str, **overrides: Any
) -> CategoryResponse:
    now = datetime(2024, 1, 1, 12, 0, 0)
    fields: Dict[str, Any] = {
        "id": category_id,
        "name": name,
        "slug": name.lower().replace(" ", "-"),
        "description": "",
        "parent_id": parent_id,
        "product_count": 0,
        "image": None,
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return CategoryResponse(**fields)


@pytest.fixture
def sample_tree():
    """Two main categories; the first has two subcategories."""
    creams = make_subcategory("sub-1", "Creams", "main-1", product_count=4)
    soaps = make_subcategory("sub-2", "Soaps", "main-1", product_count=2)
    hygiene = make_category("main-1", "Hygiene", children=[creams, soaps])
    vitamins = make_category("main-2", "Vitamins")
    return [hygiene, vitamins]


@pytest.fixture
def category_node():
    return make_category


@pytest.fixture
def subcategory_node():
    return make_subcategory
