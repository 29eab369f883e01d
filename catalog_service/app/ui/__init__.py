"""
Category management page: state, controller, HTTP client and rendering.
"""

from .client import CategoryAdminClient, CategoryClientError
from .page import CategoryManagementPage, Notification, NotificationLog
from .render import build_rows, render_page
from .state import PageState

__all__ = [
    "CategoryAdminClient",
    "CategoryClientError",
    "CategoryManagementPage",
    "Notification",
    "NotificationLog",
    "PageState",
    "build_rows",
    "render_page",
]
