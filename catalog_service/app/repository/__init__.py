"""Repository layer for Catalog Service"""

from .category_repository import CategoryRepository
from .profile_repository import ProfileRepository

__all__ = [
    "CategoryRepository",
    "ProfileRepository",
]
