"""
Unit tests for CategoryRepository store error translation
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.app.core.exceptions import StoreError
from catalog_service.app.repository.category_repository import CategoryRepository
from catalog_service.app.schemas.category import CategoryPayload
from catalog_service.app.services.category_service import CategoryService


def _connection_lost():
    return OperationalError("SELECT", {}, Exception("connection refused"))


class TestCategoryRepositoryReads:
    @pytest.fixture
    def mock_session(self):
        session = AsyncMock(spec=AsyncSession)
        session.execute.side_effect = _connection_lost()
        return session

    @pytest.fixture
    def repository(self, mock_session):
        return CategoryRepository(mock_session)

    @pytest.mark.asyncio
    async def test_list_categories_translates_store_failure(
        self, repository, mock_session
    ):
        with pytest.raises(StoreError) as exc_info:
            await repository.list_categories()

        assert exc_info.value.message == "connection refused"
        assert exc_info.value.status_code == 400
        mock_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_category_by_id_translates_store_failure(self, repository):
        with pytest.raises(StoreError):
            await repository.get_category_by_id("cat-1")

    @pytest.mark.asyncio
    async def test_count_children_translates_store_failure(self, repository):
        with pytest.raises(StoreError):
            await repository.count_children("cat-1")

    @pytest.mark.asyncio
    async def test_update_lookup_failure_is_a_store_error(self, mock_session):
        service = CategoryService(mock_session)

        with pytest.raises(StoreError) as exc_info:
            await service.update_category(
                "cat-1", CategoryPayload(name="Hygiene"), user_id="admin"
            )

        assert exc_info.value.message == "connection refused"

    @pytest.mark.asyncio
    async def test_parent_validation_failure_is_a_store_error(self, mock_session):
        service = CategoryService(mock_session)

        with pytest.raises(StoreError):
            await service.create_category(
                CategoryPayload(name="Creams", parent_id="main-1"), user_id="admin"
            )
