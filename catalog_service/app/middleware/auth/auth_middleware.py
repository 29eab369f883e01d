from typing import Any, Awaitable, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.middleware.base import BaseHTTPMiddleware

from ...core.database import get_db_session
from ...core.exceptions import ForbiddenError, UnauthorizedError
from ...core.settings import get_settings
from ...models.profile import ADMIN_ROLE
from ...repository.profile_repository import ProfileRepository
from ...utils.jwt_handler import JWTHandler
from ...utils.logging import setup_catalog_logging

logger = setup_catalog_logging("catalog_service_auth")
settings = get_settings()

DEFAULT_EXCLUDE_PATHS = [
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
]
SESSION_COOKIES = ("auth_token", "access_token")
BLANK_TOKENS = ("", "null", "undefined")


class CatalogSessionMiddleware(BaseHTTPMiddleware):
    """Resolve the caller's session token into ``request.state.user_id``.

    Requests without a valid session are passed through unauthenticated:
    public reads need no session, and the admin gate rejects mutating calls.
    """

    def __init__(
        self,
        app: Any,
        exclude_paths: Optional[list[str]] = None,
        jwt_handler: Optional[JWTHandler] = None,
    ):
        super().__init__(app)
        self.exclude_paths = exclude_paths or DEFAULT_EXCLUDE_PATHS
        self.jwt_handler = jwt_handler or JWTHandler(
            secret_key=settings.SECRET_KEY, algorithm=settings.ALGORITHM
        )

    def _should_skip_auth(self, path: str) -> bool:
        """Check if the request path should skip session resolution."""

        for exclude_path in self.exclude_paths:
            if path == exclude_path or path.startswith(exclude_path + "/"):
                return True
        return False

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if self._should_skip_auth(request.url.path):
            return await call_next(request)

        auth_result = self._authenticate_request(request)
        if auth_result["authenticated"]:
            request.state.user_id = auth_result["user_id"]
            request.state.token_source = auth_result["token_source"]
        elif auth_result["reason"] != "missing_session_token":
            logger.warning(
                f"Session resolution failed: {auth_result['reason']}",
                extra={
                    "correlation_id": request.headers.get("X-Correlation-ID"),
                    "path": request.url.path,
                    "method": request.method,
                    "reason": auth_result["reason"],
                    "event_type": "session_invalid",
                },
            )

        return await call_next(request)

    def _extract_tokens(self, request: Request) -> List[Dict[str, str]]:
        """Every session token carried by the request, cookies first."""
        candidates = []
        for cookie_name in SESSION_COOKIES:
            token = request.cookies.get(cookie_name)
            if token is not None:
                candidates.append({"token": token.strip(), "source": "cookie"})

        authorization = request.headers.get("Authorization") or ""
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer":
            candidates.append({"token": credentials.strip(), "source": "header"})
        return candidates

    def _authenticate_request(self, request: Request) -> Dict[str, Any]:
        """Validate the session token from cookies or the Authorization header.

        A blank or stale cookie does not hide a valid Bearer header: the first
        token that decodes wins.
        """

        candidates = self._extract_tokens(request)
        if not candidates:
            return {"authenticated": False, "reason": "missing_session_token"}

        tokens = [c for c in candidates if c["token"] not in BLANK_TOKENS]
        if not tokens:
            return {"authenticated": False, "reason": "empty_session_token"}

        for candidate in tokens:
            try:
                token_data = self.jwt_handler.decode_token(candidate["token"])
            except ValueError as e:
                logger.warning(
                    f"JWT validation failed: {str(e)}",
                    extra={"token_source": candidate["source"]},
                )
                continue

            return {
                "authenticated": True,
                "user_id": token_data.user_id,
                "token_source": candidate["source"],
            }

        return {"authenticated": False, "reason": "invalid_session_token"}


class AdminUser:
    """Authorization gate: an authenticated caller whose profile role is admin.

    Runs on every mutating request; nothing is cached between requests.
    """

    def __init__(self, required_role: str = ADMIN_ROLE):
        self.required_role = required_role

    async def __call__(
        self, request: Request, session: AsyncSession = Depends(get_db_session)
    ) -> Dict[str, Any]:
        correlation_id = request.headers.get("X-Correlation-ID")
        user_id = getattr(request.state, "user_id", None)

        if not user_id:
            raise UnauthorizedError()

        role = await ProfileRepository(session).get_role(user_id)
        if role != self.required_role:
            logger.warning(
                "Admin authorization failed",
                extra={
                    "correlation_id": correlation_id,
                    "user_id": user_id,
                    "user_role": role,
                    "path": request.url.path,
                    "method": request.method,
                    "event_type": "role_auth_failed",
                },
            )
            raise ForbiddenError()

        return {"user_id": user_id, "role": role}


def setup_catalog_auth_middleware(
    app: FastAPI,
    exclude_paths: Optional[list[str]] = None,
) -> None:
    """Setup session resolution middleware for the Catalog Service."""

    exclude_paths = exclude_paths or DEFAULT_EXCLUDE_PATHS
    app.add_middleware(CatalogSessionMiddleware, exclude_paths=exclude_paths)

    logger.info(
        "Catalog Service session middleware configured",
        extra={
            "excluded_paths": exclude_paths,
            "event_type": "auth_middleware_setup",
        },
    )


admin_user = AdminUser()
