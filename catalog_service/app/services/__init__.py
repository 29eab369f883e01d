"""Service layer for Catalog Service"""

from .category_service import CategoryService, build_category_tree

__all__ = [
    "CategoryService",
    "build_category_tree",
]
