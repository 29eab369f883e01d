"""Controller for the category management page."""

from dataclasses import dataclass
from typing import List, Optional, Protocol

from ..core.settings import get_settings
from ..schemas.category import CategoryResponse
from ..utils.logging import setup_catalog_logging
from . import state as page_state
from .client import (
    DELETE_FALLBACK,
    SAVE_FALLBACK,
    CategoryAdminClient,
    CategoryClientError,
)
from .state import DialogMode, PageState

logger = setup_catalog_logging("category_management_page")


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = "default"


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None: ...


class NotificationLog:
    """Keeps the toasts raised by the page, newest last."""

    def __init__(self) -> None:
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)
        logger.info(
            notification.description,
            extra={"title": notification.title, "variant": notification.variant},
        )


class CategoryManagementPage:
    """Drives the category endpoints from user events.

    Every handler applies pure transitions from ``state.py``; the network
    calls in between are awaited without locking, the ``saving`` and
    ``deleting`` flags keep a control from firing twice while in flight.
    """

    def __init__(
        self, client: CategoryAdminClient, notifier: Optional[Notifier] = None
    ):
        self.client = client
        self.notifier = notifier or NotificationLog()
        self.state = PageState()

    @classmethod
    def from_settings(
        cls, session_token: Optional[str] = None, notifier: Optional[Notifier] = None
    ) -> "CategoryManagementPage":
        settings = get_settings()
        client = CategoryAdminClient(
            settings.CATALOG_SERVICE_URL,
            session_token=session_token,
            timeout=settings.UI_REQUEST_TIMEOUT,
        )
        return cls(client, notifier)

    async def mount(self) -> None:
        """Initial load; a failure leaves the page loading."""
        self.state = PageState()
        await self.refresh()

    async def refresh(self) -> bool:
        """Re-fetch the full list; failures are only logged."""
        try:
            categories = await self.client.list_categories()
        except CategoryClientError as e:
            logger.error(
                "Error fetching categories",
                extra={"error": e.message, "status_code": e.status_code},
            )
            return False
        except Exception as e:
            logger.error(
                f"Unexpected error fetching categories: {str(e)}",
                extra={"error_type": type(e).__name__},
                exc_info=True,
            )
            return False
        self.state = page_state.categories_loaded(self.state, categories)
        return True

    def toggle_expand(self, category_id: str) -> None:
        self.state = page_state.toggle_expand(self.state, category_id)

    def open_add_dialog(self) -> None:
        self.state = page_state.open_add_dialog(self.state)

    def open_edit_dialog(self, category: CategoryResponse) -> None:
        self.state = page_state.open_edit_dialog(self.state, category)

    def close_dialog(self) -> None:
        self.state = page_state.close_dialog(self.state)

    def change_name(self, name: str) -> None:
        self.state = page_state.change_name(self.state, name)

    def change_slug(self, slug: str) -> None:
        self.state = page_state.change_slug(self.state, slug)

    def change_description(self, description: str) -> None:
        self.state = page_state.change_description(self.state, description)

    def change_parent(self, parent_id: Optional[str]) -> None:
        self.state = page_state.change_parent(self.state, parent_id)

    async def submit(self) -> bool:
        """Create or update from the dialog form. Returns True on success."""
        if not page_state.can_submit(self.state):
            return False

        editing = self.state.editing
        payload = page_state.build_payload(self.state)
        self.state = page_state.save_started(self.state)
        try:
            if editing is not None:
                await self.client.update_category(editing.id, payload)
            else:
                await self.client.create_category(payload)
            await self.refresh()
        except CategoryClientError as e:
            logger.error("Error saving category", extra={"error": e.message})
            self._notify_error(e.message)
            return False
        except Exception as e:
            logger.error(
                f"Unexpected error saving category: {str(e)}",
                extra={"error_type": type(e).__name__},
                exc_info=True,
            )
            self._notify_error(SAVE_FALLBACK)
            return False
        else:
            self.state = page_state.save_succeeded(self.state)
        finally:
            # A failed save keeps the dialog open with submit enabled again
            if self.state.saving:
                self.state = page_state.save_failed(self.state)

        self.notifier.notify(
            Notification(
                "Success", "Category updated" if editing else "Category created"
            )
        )
        return True

    async def delete(self, category_id: str) -> bool:
        """Delete once the surrounding dialog has confirmed. Returns True on success."""
        if category_id in self.state.deleting:
            return False

        self.state = page_state.delete_started(self.state, category_id)
        try:
            await self.client.delete_category(category_id)
            await self.refresh()
        except CategoryClientError as e:
            logger.error(
                "Error deleting category",
                extra={"category_id": category_id, "error": e.message},
            )
            self._notify_error(e.message)
            return False
        except Exception as e:
            logger.error(
                f"Unexpected error deleting category: {str(e)}",
                extra={"category_id": category_id, "error_type": type(e).__name__},
                exc_info=True,
            )
            self._notify_error(DELETE_FALLBACK)
            return False
        finally:
            self.state = page_state.delete_finished(self.state, category_id)

        self.notifier.notify(Notification("Success", "Category deleted"))
        return True

    @property
    def dialog_open(self) -> bool:
        return self.state.dialog is not DialogMode.CLOSED

    def _notify_error(self, message: str) -> None:
        self.notifier.notify(Notification("Error", message, variant="destructive"))
