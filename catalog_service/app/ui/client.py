"""
HTTP client used by the category management page.
Talks to the public listing and the admin endpoints of the Catalog Service.
"""

from typing import Any, Callable, Dict, List, Optional, TypeVar

import httpx
from pydantic import ValidationError

from ..schemas.category import CategoryResponse, CategoryTreeNode

T = TypeVar("T")

LOAD_FALLBACK = "Unable to load categories"
SAVE_FALLBACK = "Unable to save category"
DELETE_FALLBACK = "Unable to delete category"


class CategoryClientError(Exception):
    """A request failed; ``message`` is what the page shows to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CategoryAdminClient:
    """Client for the category endpoints"""

    def __init__(
        self,
        base_url: str,
        session_token: Optional[str] = None,
        timeout: float = 30,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        headers = {"Authorization": f"Bearer {session_token}"} if session_token else {}
        self.client = http_client or httpx.AsyncClient(timeout=timeout)
        self.headers = headers

    async def list_categories(self) -> List[CategoryTreeNode]:
        response = await self._request("GET", "/api/v1/categories")
        return self._parse(
            response,
            LOAD_FALLBACK,
            lambda body: [CategoryTreeNode.model_validate(item) for item in body],
        )

    async def create_category(self, payload: Dict[str, Any]) -> CategoryResponse:
        response = await self._request(
            "POST", "/api/v1/admin/categories", json=payload
        )
        return self._parse(
            response,
            SAVE_FALLBACK,
            lambda body: CategoryResponse.model_validate(body["data"]),
        )

    async def update_category(
        self, category_id: str, payload: Dict[str, Any]
    ) -> CategoryResponse:
        response = await self._request(
            "PUT", f"/api/v1/admin/categories/{category_id}", json=payload
        )
        return self._parse(
            response,
            SAVE_FALLBACK,
            lambda body: CategoryResponse.model_validate(body["data"]),
        )

    async def delete_category(self, category_id: str) -> None:
        response = await self._request(
            "DELETE", f"/api/v1/admin/categories/{category_id}"
        )
        self._raise_for_error(response, DELETE_FALLBACK)

    async def close(self):
        """Close the HTTP client"""
        await self.client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self.client.request(
                method, f"{self.base_url}{path}", headers=self.headers, **kwargs
            )
        except httpx.HTTPError as e:
            raise CategoryClientError(f"Network error: {e}") from e

    def _parse(
        self, response: httpx.Response, fallback: str, parser: Callable[[Any], T]
    ) -> T:
        """Decode a successful body; anything unreadable is reported as ``fallback``."""
        self._raise_for_error(response, fallback)
        try:
            return parser(response.json())
        except (ValueError, KeyError, TypeError, ValidationError) as e:
            raise CategoryClientError(fallback, status_code=response.status_code) from e

    @staticmethod
    def _raise_for_error(response: httpx.Response, fallback: str) -> None:
        if response.is_success:
            return
        message = fallback
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            message = str(body["error"])
        raise CategoryClientError(message, status_code=response.status_code)
