from typing import Any, Dict

from fastapi import APIRouter

from ...core.settings import get_settings
from ...utils.service_health import create_catalog_service_health_check

router = APIRouter()


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Health check endpoint for the catalog service."""
    settings = get_settings()
    return create_catalog_service_health_check(
        settings.SERVICE_NAME, settings.APP_VERSION
    )
