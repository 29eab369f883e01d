"""Exceptions raised by the Catalog Service and rendered by the error handler."""


class CatalogServiceError(Exception):
    """Base exception for all Catalog Service errors."""

    status_code = 500
    error_type = "internal_server_error"
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(CatalogServiceError):
    """No resolvable session on the request."""

    status_code = 401
    error_type = "authentication_error"
    default_message = "Unauthorized"


class ForbiddenError(CatalogServiceError):
    """Resolvable session, but the caller is not an administrator."""

    status_code = 403
    error_type = "authorization_error"
    default_message = "Forbidden"


class StoreError(CatalogServiceError):
    """The data store rejected the operation."""

    status_code = 400
    error_type = "store_error"
    default_message = "The data store rejected the operation"


class CategoryNotFoundError(StoreError):
    default_message = "Category not found"


class CategoryHierarchyError(StoreError):
    """The requested parent would break the two-level taxonomy."""

    error_type = "hierarchy_error"
    default_message = "Invalid parent category"


class InternalError(CatalogServiceError):
    """Unexpected failure; details are only logged server-side."""
