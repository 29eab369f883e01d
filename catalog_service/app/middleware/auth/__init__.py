"""
Authentication middleware package for Catalog Service.
"""

from .auth_middleware import (
    AdminUser,
    CatalogSessionMiddleware,
    admin_user,
    setup_catalog_auth_middleware,
)

__all__ = [
    "CatalogSessionMiddleware",
    "AdminUser",
    "admin_user",
    "setup_catalog_auth_middleware",
]
