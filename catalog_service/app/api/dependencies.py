"""
FastAPI dependency injection for Catalog Service

Provides database sessions for both store credentials, the category service,
the admin gate and correlation ID extraction.
"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_admin_db_session, get_db_session
from ..middleware.auth.auth_middleware import admin_user
from ..services.category_service import CategoryService

# =====================================================
# SERVICE DEPENDENCIES
# =====================================================


def get_category_service(
    session: AsyncSession = Depends(get_db_session),
) -> CategoryService:
    """CategoryService on the caller-scoped credential, for public reads"""
    return CategoryService(session)


def get_admin_category_service(
    session: AsyncSession = Depends(get_admin_db_session),
) -> CategoryService:
    """CategoryService on the privileged credential, for admin mutations"""
    return CategoryService(session)


# =====================================================
# REQUEST CONTEXT DEPENDENCIES
# =====================================================


def get_correlation_id(request: Request) -> Optional[str]:
    """Extract correlation ID from request headers"""
    return (
        request.headers.get("X-Correlation-ID")
        or request.headers.get("correlation-id")
        or request.headers.get("x-request-id")
    )


# =====================================================
# COMMON DEPENDENCY ALIASES
# =====================================================

CorrelationIdDep = Depends(get_correlation_id)
AdminUserDep = Depends(admin_user)
CategoryServiceDep = Depends(get_category_service)
AdminCategoryServiceDep = Depends(get_admin_category_service)
