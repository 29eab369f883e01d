"""Public category API endpoints"""

from typing import List, Optional

from fastapi import APIRouter

from ...schemas.category import CategoryTreeNode
from ...services.category_service import CategoryService
from ..dependencies import CategoryServiceDep, CorrelationIdDep

router = APIRouter(prefix="/categories")


@router.get("", response_model=List[CategoryTreeNode])
async def list_categories(
    service: CategoryService = CategoryServiceDep,
    correlation_id: Optional[str] = CorrelationIdDep,
):
    """Main categories, each with its subcategories under ``children``"""
    return await service.list_category_tree(correlation_id=correlation_id)
