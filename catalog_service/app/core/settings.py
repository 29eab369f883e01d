"""
Catalog Service configuration using shared patterns
"""

from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the catalog service directory path
CATALOG_SERVICE_DIR = Path(__file__).parent.parent.parent
ENV_FILE = CATALOG_SERVICE_DIR / ".env"


class CatalogSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Catalog Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Service specific
    SERVICE_NAME: str = "catalog-service"
    CATALOG_SERVICE_URL: str = "http://localhost:8000"

    # Database: caller-scoped credential and privileged credential
    CATALOG_DATABASE_URL: str
    CATALOG_ADMIN_DATABASE_URL: Optional[str] = None
    TEST_DATABASE_URL: Optional[str] = None

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    # Categories
    CATEGORY_PLACEHOLDER_IMAGE: str = "/pharmacy-category.jpg"

    # Admin UI
    UI_REQUEST_TIMEOUT: float = 30.0

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    CORS_CREDENTIALS: bool = True
    CORS_METHODS: List[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    CORS_HEADERS: List[str] = ["*"]

    @property
    def admin_database_url(self) -> str:
        """Privileged store credential, defaulting to the caller-scoped one."""
        return self.CATALOG_ADMIN_DATABASE_URL or self.CATALOG_DATABASE_URL


# Create a singleton instance
_settings_instance = None


def get_settings() -> CatalogSettings:
    """Get settings singleton instance"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = CatalogSettings()
    return _settings_instance
