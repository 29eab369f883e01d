"""Admin category API endpoints"""

from typing import Any, Dict, Optional

from fastapi import APIRouter

from ...core.exceptions import CatalogServiceError, InternalError
from ...schemas.category import CategoryEnvelope, CategoryPayload
from ...services.category_service import CategoryService
from ...utils.logging import setup_catalog_logging as setup_logging
from ..dependencies import AdminCategoryServiceDep, AdminUserDep, CorrelationIdDep

logger = setup_logging("admin_categories_api")
router = APIRouter(prefix="/admin/categories")


@router.post("", response_model=CategoryEnvelope)
async def create_category(
    payload: CategoryPayload,
    admin: Dict[str, Any] = AdminUserDep,
    service: CategoryService = AdminCategoryServiceDep,
    correlation_id: Optional[str] = CorrelationIdDep,
):
    """Create a main category or subcategory (admin only)"""
    try:
        category = await service.create_category(
            payload=payload,
            user_id=admin["user_id"],
            correlation_id=correlation_id,
        )
        return CategoryEnvelope(data=category)
    except CatalogServiceError:
        raise
    except Exception as e:
        logger.error(
            f"Error in POST /admin/categories: {str(e)}",
            extra={
                "user_id": admin["user_id"],
                "correlation_id": correlation_id,
                "error": str(e),
            },
            exc_info=True,
        )
        raise InternalError()


@router.put("/{category_id}", response_model=CategoryEnvelope)
async def update_category(
    category_id: str,
    payload: CategoryPayload,
    admin: Dict[str, Any] = AdminUserDep,
    service: CategoryService = AdminCategoryServiceDep,
    correlation_id: Optional[str] = CorrelationIdDep,
):
    """Update a category, including re-parenting (admin only)"""
    try:
        category = await service.update_category(
            category_id=category_id,
            payload=payload,
            user_id=admin["user_id"],
            correlation_id=correlation_id,
        )
        return CategoryEnvelope(data=category)
    except CatalogServiceError:
        raise
    except Exception as e:
        logger.error(
            f"Error in PUT /admin/categories/{category_id}: {str(e)}",
            extra={
                "category_id": category_id,
                "user_id": admin["user_id"],
                "correlation_id": correlation_id,
                "error": str(e),
            },
            exc_info=True,
        )
        raise InternalError()


@router.delete(
    "/{category_id}", response_model=CategoryEnvelope, response_model_exclude_none=True
)
async def delete_category(
    category_id: str,
    admin: Dict[str, Any] = AdminUserDep,
    service: CategoryService = AdminCategoryServiceDep,
    correlation_id: Optional[str] = CorrelationIdDep,
):
    """Delete a category and its direct subcategories (admin only)"""
    try:
        await service.delete_category(
            category_id=category_id,
            user_id=admin["user_id"],
            correlation_id=correlation_id,
        )
        return CategoryEnvelope()
    except CatalogServiceError:
        raise
    except Exception as e:
        logger.error(
            f"Error in DELETE /admin/categories/{category_id}: {str(e)}",
            extra={
                "category_id": category_id,
                "user_id": admin["user_id"],
                "correlation_id": correlation_id,
                "error": str(e),
            },
            exc_info=True,
        )
        raise InternalError()
