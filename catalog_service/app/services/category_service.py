"""Category service for business logic"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import CategoryHierarchyError, CategoryNotFoundError, StoreError
from ..core.settings import get_settings
from ..models.category import Category
from ..repository.category_repository import CategoryRepository
from ..schemas.category import CategoryPayload, CategoryResponse, CategoryTreeNode
from ..utils.logging import setup_catalog_logging as setup_logging
from ..utils.slug import generate_slug

settings = get_settings()
logger = setup_logging("category_service", log_level=settings.LOG_LEVEL)


def build_category_tree(categories: Iterable[Category]) -> List[CategoryTreeNode]:
    """Group subcategories under their main category.

    Main categories keep the order they were given in; rows whose parent is
    missing or is itself a subcategory do not fit the two-level tree and are
    left out.
    """
    categories = list(categories)
    nodes: Dict[str, CategoryTreeNode] = {}
    for category in categories:
        if category.parent_id is None:
            nodes[category.id] = CategoryTreeNode.model_validate(category)

    orphans = []
    for category in categories:
        if category.parent_id is None:
            continue
        parent = nodes.get(category.parent_id)
        if parent is None:
            orphans.append(category.id)
            continue
        parent.children.append(CategoryResponse.model_validate(category))

    if orphans:
        logger.warning(
            "Categories outside the two-level tree were skipped",
            extra={"category_ids": orphans, "event_type": "category_tree_orphans"},
        )

    return list(nodes.values())


class CategoryService:
    """Service class for category business logic"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = CategoryRepository(db)

    async def list_category_tree(
        self, correlation_id: Optional[str] = None
    ) -> List[CategoryTreeNode]:
        categories = await self.repository.list_categories()
        tree = build_category_tree(categories)

        logger.info(
            "Category tree listed",
            extra={
                "main_categories": len(tree),
                "total_categories": len(categories),
                "correlation_id": correlation_id,
            },
        )
        return tree

    async def create_category(
        self,
        payload: CategoryPayload,
        user_id: str,
        correlation_id: Optional[str] = None,
    ) -> CategoryResponse:
        """Create a new category with validation"""
        try:
            await self._validate_parent(payload.parent_id)

            fields = self._mutable_fields(payload)
            fields["product_count"] = 0
            fields["image"] = settings.CATEGORY_PLACEHOLDER_IMAGE
            category = await self.repository.create_category(fields)

            logger.info(
                "Category created successfully",
                extra={
                    "category_id": category.id,
                    "category_name": category.name,
                    "parent_id": category.parent_id,
                    "user_id": user_id,
                    "correlation_id": correlation_id,
                },
            )
            return CategoryResponse.model_validate(category)

        except StoreError as e:
            logger.error(
                f"Failed to create category: {e.message}",
                extra={
                    "category_name": payload.name,
                    "user_id": user_id,
                    "correlation_id": correlation_id,
                    "error": e.message,
                },
            )
            raise

    async def update_category(
        self,
        category_id: str,
        payload: CategoryPayload,
        user_id: str,
        correlation_id: Optional[str] = None,
    ) -> CategoryResponse:
        """Overwrite name, slug, description and parent of a category"""
        try:
            category = await self.repository.get_category_by_id(category_id)
            if not category:
                raise CategoryNotFoundError()

            await self._validate_parent(payload.parent_id, category_id=category_id)

            category = await self.repository.update_category(
                category, self._mutable_fields(payload)
            )

            logger.info(
                "Category updated successfully",
                extra={
                    "category_id": category_id,
                    "parent_id": category.parent_id,
                    "user_id": user_id,
                    "correlation_id": correlation_id,
                },
            )
            return CategoryResponse.model_validate(category)

        except StoreError as e:
            logger.error(
                f"Failed to update category: {e.message}",
                extra={
                    "category_id": category_id,
                    "user_id": user_id,
                    "correlation_id": correlation_id,
                    "error": e.message,
                },
            )
            raise

    async def delete_category(
        self, category_id: str, user_id: str, correlation_id: Optional[str] = None
    ) -> int:
        """Delete a category together with its direct subcategories"""
        try:
            deleted = await self.repository.delete_category_with_children(category_id)

            logger.info(
                "Category deleted successfully",
                extra={
                    "category_id": category_id,
                    "deleted_rows": deleted,
                    "user_id": user_id,
                    "correlation_id": correlation_id,
                },
            )
            return deleted

        except StoreError as e:
            logger.error(
                f"Failed to delete category: {e.message}",
                extra={
                    "category_id": category_id,
                    "user_id": user_id,
                    "correlation_id": correlation_id,
                    "error": e.message,
                },
            )
            raise

    async def _validate_parent(
        self, parent_id: Optional[str], category_id: Optional[str] = None
    ) -> None:
        """Keep the taxonomy at two levels"""
        if parent_id is None:
            return

        if parent_id == category_id:
            raise CategoryHierarchyError("Category cannot be its own parent")

        parent = await self.repository.get_category_by_id(parent_id)
        if not parent:
            raise CategoryHierarchyError(f"Parent category {parent_id} not found")
        if parent.parent_id is not None:
            raise CategoryHierarchyError(
                "Parent must be a main category, subcategories cannot have children"
            )

        if category_id and await self.repository.count_children(category_id):
            raise CategoryHierarchyError(
                "Category with subcategories cannot become a subcategory"
            )

    @staticmethod
    def _mutable_fields(payload: CategoryPayload) -> Dict[str, Optional[str]]:
        slug = payload.slug or generate_slug(payload.name)
        if not slug:
            raise StoreError("Category slug cannot be empty")
        return {
            "name": payload.name,
            "slug": slug,
            "description": payload.description,
            "parent_id": payload.parent_id,
        }
