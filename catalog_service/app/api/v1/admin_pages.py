"""Server-rendered category management page"""

from typing import Any, Dict, Optional

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from ...services.category_service import CategoryService
from ...ui.render import render_page
from ...ui.state import PageState, categories_loaded
from ..dependencies import AdminUserDep, CategoryServiceDep, CorrelationIdDep

router = APIRouter()


@router.get("/admin/categories", response_class=HTMLResponse)
async def category_management_page(
    admin: Dict[str, Any] = AdminUserDep,
    service: CategoryService = CategoryServiceDep,
    correlation_id: Optional[str] = CorrelationIdDep,
) -> HTMLResponse:
    """Category tree with every main category expanded"""
    tree = await service.list_category_tree(correlation_id=correlation_id)
    return HTMLResponse(render_page(categories_loaded(PageState(), tree)))
