"""
Unit tests for the Catalog Service database configuration
"""

import pytest

from catalog_service.app.core.database import CatalogDatabaseManager
from catalog_service.app.core.settings import CatalogSettings

CALLER_URL = "sqlite+aiosqlite:///catalog_caller.db"
PRIVILEGED_URL = "sqlite+aiosqlite:///catalog_privileged.db"


class TestAdminDatabaseUrl:
    def test_defaults_to_caller_url(self):
        settings = CatalogSettings(
            CATALOG_DATABASE_URL=CALLER_URL,
            CATALOG_ADMIN_DATABASE_URL=None,
            SECRET_KEY="secret",
        )

        assert settings.admin_database_url == CALLER_URL

    def test_uses_privileged_url_when_configured(self):
        settings = CatalogSettings(
            CATALOG_DATABASE_URL=CALLER_URL,
            CATALOG_ADMIN_DATABASE_URL=PRIVILEGED_URL,
            SECRET_KEY="secret",
        )

        assert settings.admin_database_url == PRIVILEGED_URL


class TestCatalogDatabaseManager:
    @pytest.mark.asyncio
    async def test_same_url_shares_one_engine(self):
        manager = CatalogDatabaseManager(
            database_url=CALLER_URL, admin_database_url=CALLER_URL
        )

        assert manager.admin_engine is manager.async_engine
        await manager.close()

    @pytest.mark.asyncio
    async def test_privileged_url_gets_its_own_engine(self):
        manager = CatalogDatabaseManager(
            database_url=CALLER_URL, admin_database_url=PRIVILEGED_URL
        )

        assert manager.admin_engine is not manager.async_engine
        assert str(manager.admin_engine.url) == PRIVILEGED_URL
        assert str(manager.async_engine.url) == CALLER_URL
        await manager.close()

