"""Category repository for database operations"""

from typing import Any, Dict, Optional, Sequence

from sqlalchemy import Executable, Result, delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import CategoryNotFoundError, StoreError
from ..models.base import utcnow
from ..models.category import Category


def _store_message(error: SQLAlchemyError) -> str:
    """Message reported by the driver, without SQLAlchemy's statement dump."""
    original = getattr(error, "orig", None)
    return str(original) if original is not None else str(error)


class CategoryRepository:
    """Repository for category database operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_categories(self) -> Sequence[Category]:
        """All categories, main and sub, ordered by name"""
        query = select(Category).order_by(Category.name, Category.created_at)
        result = await self._execute(query)
        return result.scalars().all()

    async def get_category_by_id(self, category_id: str) -> Optional[Category]:
        query = select(Category).where(Category.id == category_id)
        result = await self._execute(query)
        return result.scalar_one_or_none()

    async def count_children(self, category_id: str) -> int:
        query = select(func.count(Category.id)).where(
            Category.parent_id == category_id
        )
        result = await self._execute(query)
        return result.scalar_one()

    async def create_category(self, fields: Dict[str, Any]) -> Category:
        """Insert a new category row"""
        category = Category(**fields)
        self.db.add(category)
        await self._commit()
        await self.db.refresh(category)
        return category

    async def update_category(
        self, category: Category, fields: Dict[str, Any]
    ) -> Category:
        """Overwrite the mutable fields and refresh updated_at"""
        for field, value in fields.items():
            setattr(category, field, value)
        category.updated_at = utcnow()

        await self._commit()
        await self.db.refresh(category)
        return category

    async def delete_category_with_children(self, category_id: str) -> int:
        """Delete the direct subcategories and the category in one transaction.

        Returns the number of deleted rows. Nothing is deleted when the
        category does not exist or when any statement fails.
        """
        try:
            children = await self.db.execute(
                delete(Category).where(Category.parent_id == category_id)
            )
            result = await self.db.execute(
                delete(Category).where(Category.id == category_id)
            )
            if result.rowcount == 0:
                await self.db.rollback()
                raise CategoryNotFoundError()
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(_store_message(e)) from e

        return children.rowcount + result.rowcount

    async def _execute(self, query: Executable) -> Result:
        try:
            return await self.db.execute(query)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(_store_message(e)) from e

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(_store_message(e)) from e
