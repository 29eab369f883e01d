from .category import (
    CategoryEnvelope,
    CategoryPayload,
    CategoryResponse,
    CategoryTreeNode,
)

__all__ = [
    "CategoryEnvelope",
    "CategoryPayload",
    "CategoryResponse",
    "CategoryTreeNode",
]
