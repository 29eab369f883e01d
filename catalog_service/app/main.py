"""
Catalog Service FastAPI Application
===================================

Main application entry point for the Catalog Service microservice.
Serves the public category tree and the admin endpoints and page that
manage the two-level category taxonomy.
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.admin_categories import router as admin_categories_router
from .api.v1.admin_pages import router as admin_pages_router
from .api.v1.categories import router as categories_router
from .api.v1.health import router as health_router
from .core.database import get_database_manager
from .core.settings import get_settings
from .middleware.auth.auth_middleware import setup_catalog_auth_middleware
from .middleware.error.error_handler import setup_catalog_error_handling
from .utils.logging import setup_catalog_logging

settings = get_settings()
enable_file_logging = settings.ENVIRONMENT.lower() in ["production", "staging"]

logger = setup_catalog_logging(
    "catalog_service",
    log_level=settings.LOG_LEVEL,
    enable_file_logging=enable_file_logging,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager for startup and shutdown."""

    logger.info(
        "Starting catalog service initialization",
        extra={
            "environment": settings.ENVIRONMENT,
            "debug_mode": settings.DEBUG,
            "file_logging_enabled": enable_file_logging,
            "service_version": settings.APP_VERSION,
        },
    )
    try:
        await get_database_manager().create_tables()
    except Exception as e:
        logger.error(
            "Failed to start catalog service",
            exc_info=True,
            extra={"error_type": type(e).__name__},
        )
        raise
    logger.info("Catalog service started successfully")

    yield

    logger.info("Starting catalog service shutdown")
    await get_database_manager().close()
    logger.info("Catalog service shutdown completed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    _setup_middleware(app)
    _setup_cors(app)
    _setup_routers(app)

    return app


def _setup_middleware(app: FastAPI) -> None:
    """Configure session resolution and error handling."""

    setup_catalog_auth_middleware(app)
    setup_catalog_error_handling(app)


def _setup_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_CREDENTIALS,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
    )

    logger.info(
        "CORS middleware configured",
        extra={
            "allowed_origins": len(settings.CORS_ORIGINS),
            "credentials_allowed": settings.CORS_CREDENTIALS,
        },
    )


def _setup_routers(app: FastAPI) -> None:
    """Configure all application routers."""

    routers_info: list[dict[str, Any]] = []

    app.include_router(health_router, tags=["Health"])
    routers_info.append({"router": "health", "prefix": "", "tags": ["Health"]})

    app.include_router(categories_router, prefix="/api/v1", tags=["Categories"])
    routers_info.append(
        {"router": "categories", "prefix": "/api/v1", "tags": ["Categories"]}
    )

    app.include_router(
        admin_categories_router, prefix="/api/v1", tags=["Category Administration"]
    )
    routers_info.append(
        {
            "router": "admin_categories",
            "prefix": "/api/v1",
            "tags": ["Category Administration"],
        }
    )

    app.include_router(admin_pages_router, tags=["Admin Pages"])
    routers_info.append({"router": "admin_pages", "prefix": "", "tags": ["Admin Pages"]})

    logger.info(
        "API routes configured",
        extra={"total_routers": len(routers_info), "routers": routers_info},
    )


app = create_app()
