import traceback
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...core.exceptions import CatalogServiceError, InternalError
from ...utils.logging import setup_catalog_logging

logger = setup_catalog_logging("catalog_service_error_handler")


def _correlation_id(request: Request) -> str:
    return request.headers.get("X-Correlation-ID") or "unknown"


class CatalogServiceErrorHandler:
    """Render every failure as the ``{"success": false, "error": ...}`` envelope."""

    @staticmethod
    def setup_error_handlers(app: FastAPI) -> None:
        """Setup error handlers for the FastAPI application."""

        @app.exception_handler(CatalogServiceError)
        async def catalog_error_handler(  # type: ignore
            request: Request, exc: CatalogServiceError
        ) -> JSONResponse:
            """Handle expected failures: 401, 403, store errors, internal errors."""

            return CatalogServiceErrorHandler._create_error_response(
                request=request,
                status_code=exc.status_code,
                error_type=exc.error_type,
                message=exc.message,
            )

        @app.exception_handler(StarletteHTTPException)
        async def http_exception_handler(  # type: ignore
            request: Request, exc: StarletteHTTPException
        ) -> JSONResponse:
            return CatalogServiceErrorHandler._create_error_response(
                request=request,
                status_code=exc.status_code,
                error_type="http_error",
                message=str(exc.detail),
            )

        @app.exception_handler(RequestValidationError)
        async def validation_exception_handler(  # type: ignore
            request: Request, exc: RequestValidationError
        ) -> JSONResponse:
            """Invalid bodies are reported as 400 with the first error as message."""

            error_details: list[dict[str, str]] = []
            for error in exc.errors():
                error_details.append(
                    {
                        "field": ".".join(str(loc) for loc in error["loc"]),
                        "message": error["msg"],
                        "type": error["type"],
                    }
                )

            message = "Request validation failed"
            if error_details:
                first = error_details[0]
                message = f"{first['field']}: {first['message']}"

            return CatalogServiceErrorHandler._create_error_response(
                request=request,
                status_code=400,
                error_type="validation_error",
                message=message,
                details={"validation_errors": error_details},
            )

        @app.exception_handler(Exception)
        async def general_exception_handler(  # type: ignore
            request: Request, exc: Exception
        ) -> JSONResponse:
            """Handle all uncaught exceptions."""

            logger.error(
                "Unhandled exception occurred",
                extra={
                    "correlation_id": _correlation_id(request),
                    "user_id": getattr(request.state, "user_id", "anonymous"),
                    "path": request.url.path,
                    "method": request.method,
                    "exception_type": type(exc).__name__,
                    "exception_message": str(exc),
                    "traceback": traceback.format_exc(),
                    "event_type": "unhandled_exception",
                },
            )

            internal = InternalError()
            return CatalogServiceErrorHandler._create_error_response(
                request=request,
                status_code=internal.status_code,
                error_type=internal.error_type,
                message=internal.message,
            )

    @staticmethod
    def _create_error_response(
        request: Request,
        status_code: int,
        error_type: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""

        correlation_id = _correlation_id(request)
        error_response: Dict[str, Any] = {
            "success": False,
            "error": message,
            "error_type": error_type,
            "correlation_id": correlation_id,
        }
        if details:
            error_response["details"] = details

        if status_code < 500:
            logger.warning(
                f"Client error: {error_type}",
                extra={
                    "correlation_id": correlation_id,
                    "user_id": getattr(request.state, "user_id", "anonymous"),
                    "status_code": status_code,
                    "error_type": error_type,
                    "path": request.url.path,
                    "method": request.method,
                    "event_type": "client_error",
                },
            )

        return JSONResponse(status_code=status_code, content=error_response)


def setup_catalog_error_handling(app: FastAPI) -> None:
    """Setup error handling for the Catalog Service."""

    CatalogServiceErrorHandler.setup_error_handlers(app)

    logger.info(
        "Catalog Service error handling configured",
        extra={"event_type": "error_handler_setup"},
    )
