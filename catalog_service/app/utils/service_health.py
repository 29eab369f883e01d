"""
Catalog Service Health Check Utilities
======================================

Independent health check functionality for Catalog service.
"""

import time
from typing import Any, Callable, Dict

from ..core.settings import get_settings


class CatalogServiceHealthChecker:
    """Catalog Service specific health checker"""

    def __init__(self, service_name: str = "catalog_service") -> None:
        self.service_name = service_name
        self.checks: Dict[str, Callable[[], Dict[str, Any]]] = {}
        self.start_time = time.time()

    def add_check(self, name: str, check_func: Callable[[], Dict[str, Any]]) -> None:
        """Add a health check function"""
        self.checks[name] = check_func

    def run_checks(self) -> Dict[str, Any]:
        """Run all health checks"""
        results = {}
        check_start_time = time.time()

        for name, check_func in self.checks.items():
            individual_start = time.time()
            try:
                result = check_func()
                result["duration_ms"] = round(
                    (time.time() - individual_start) * 1000, 2
                )
                results[name] = result
            except Exception as e:
                results[name] = {
                    "status": "error",
                    "error": str(e),
                    "duration_ms": round((time.time() - individual_start) * 1000, 2),
                }

        total_time = (time.time() - check_start_time) * 1000
        uptime = time.time() - self.start_time

        return {
            "service": self.service_name,
            "status": "healthy"
            if all(r.get("status") == "healthy" for r in results.values())
            else "unhealthy",
            "checks": results,
            "total_duration_ms": round(total_time, 2),
            "uptime_seconds": round(uptime, 2),
            "timestamp": time.time(),
        }

    def add_catalog_specific_checks(self, version: str) -> None:
        """Add Catalog Service specific health checks"""

        def basic_check() -> Dict[str, Any]:
            return {
                "status": "healthy",
                "message": "Catalog Service is running",
                "version": version,
                "component": "core",
            }

        def database_config_check() -> Dict[str, Any]:
            settings = get_settings()
            return {
                "status": "healthy" if settings.CATALOG_DATABASE_URL else "unhealthy",
                "privileged_credential": bool(settings.CATALOG_ADMIN_DATABASE_URL),
                "component": "database",
            }

        self.add_check("basic", basic_check)
        self.add_check("database", database_config_check)


def create_catalog_service_health_check(
    service_name: str = "catalog_service", version: str = "1.0.0"
) -> Dict[str, Any]:
    """Create basic Catalog Service health check"""
    health_checker = CatalogServiceHealthChecker(service_name)
    health_checker.add_catalog_specific_checks(version)
    return health_checker.run_checks()
