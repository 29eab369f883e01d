from .base import CatalogServiceBase, CatalogServiceBaseModel
from .category import Category
from .profile import ADMIN_ROLE, Profile

"""Catalog Service Models"""

__all__ = [
    "CatalogServiceBase",
    "CatalogServiceBaseModel",
    "Category",
    "Profile",
    "ADMIN_ROLE",
]
