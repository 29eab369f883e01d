from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from ..models.base import CatalogServiceBase
from ..utils.logging import setup_catalog_logging as setup_logging
from .settings import get_settings

logger = setup_logging("catalog_service.database", log_level=get_settings().LOG_LEVEL)


def _mask_url(database_url: str) -> str:
    """Hide credentials before a URL reaches the logs."""
    if "@" not in database_url:
        return database_url
    scheme, _, rest = database_url.partition("://")
    return f"{scheme}://***@{rest.split('@', 1)[1]}"


def _build_engine(database_url: str, echo: bool) -> AsyncEngine:
    engine_kwargs: Dict[str, Any] = {
        "echo": echo,
        "future": True,
    }

    if "sqlite" in database_url:
        # One connection per session; pooled aiosqlite connections are loop bound
        engine_kwargs["poolclass"] = NullPool
        engine_kwargs["connect_args"] = {
            "timeout": 60,
            "check_same_thread": False,
        }
        logger.info(
            "Configured SQLite database settings",
            extra={"database_type": "sqlite", "timeout": 60},
        )
    else:
        engine_kwargs.update(
            {
                "pool_size": 10,
                "max_overflow": 20,
                "pool_timeout": 30,
                "pool_recycle": 3600,
                "pool_pre_ping": True,
                "connect_args": {
                    "command_timeout": 30,
                    # Disable prepared statements to stay compatible with poolers
                    "prepared_statement_cache_size": 0,
                },
            }
        )
        logger.info(
            "Configured PostgreSQL database settings",
            extra={"database_type": "postgresql", "pool_size": 10, "max_overflow": 20},
        )

    return create_async_engine(database_url, **engine_kwargs)


def _session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


class CatalogDatabaseManager:
    """Database manager holding the caller-scoped and the privileged engines.

    The caller-scoped engine serves reads made on behalf of the requesting user
    (profile lookups, public listings). The privileged engine performs category
    mutations once the caller has been authorized. When both URLs are equal a
    single engine is shared.
    """

    def __init__(
        self,
        database_url: str,
        admin_database_url: Optional[str] = None,
        echo: bool = False,
    ) -> None:
        logger.info(
            "Initializing Catalog Service database manager",
            extra={
                "operation": "database_manager_init",
                "database_url": _mask_url(database_url),
                "privileged_url_configured": bool(admin_database_url),
                "echo": echo,
                "event_type": "database_manager_initialization",
            },
        )

        self.async_engine = _build_engine(database_url, echo)
        if admin_database_url and admin_database_url != database_url:
            self.admin_engine = _build_engine(admin_database_url, echo)
        else:
            self.admin_engine = self.async_engine

        self.async_session_maker = _session_maker(self.async_engine)
        self.admin_session_maker = _session_maker(self.admin_engine)

    async def create_tables(self) -> None:
        """Create all Catalog Service database tables."""
        try:
            async with self.admin_engine.begin() as conn:
                await conn.run_sync(
                    CatalogServiceBase.metadata.create_all, checkfirst=True
                )
            logger.info(
                "Database tables created successfully",
                extra={
                    "operation": "create_tables",
                    "event_type": "database_tables_created",
                },
            )
        except Exception as e:
            # Tables may already exist from another instance
            logger.warning(
                "Database table creation failed",
                extra={
                    "operation": "create_tables",
                    "error": str(e),
                    "event_type": "database_table_creation_failed",
                },
            )

    async def get_async_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Caller-scoped session."""
        async with self.async_session_maker() as session:
            yield session

    async def get_admin_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Privileged session, only handed out after the admin gate passed."""
        async with self.admin_session_maker() as session:
            yield session

    async def close(self) -> None:
        """Dispose every engine owned by the manager."""
        logger.info(
            "Closing Catalog Service database connections",
            extra={"operation": "database_close", "event_type": "database_shutdown"},
        )
        await self.async_engine.dispose()
        if self.admin_engine is not self.async_engine:
            await self.admin_engine.dispose()


settings = get_settings()
database_manager: Optional[CatalogDatabaseManager] = CatalogDatabaseManager(
    database_url=settings.CATALOG_DATABASE_URL,
    admin_database_url=settings.admin_database_url,
    echo=settings.DEBUG,
)


def get_database_manager() -> CatalogDatabaseManager:
    if database_manager is None:
        raise RuntimeError("Catalog Service database manager is not initialized")
    return database_manager


# Dependency injection functions for FastAPI
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get a caller-scoped database session for dependency injection."""
    async for session in get_database_manager().get_async_session():
        yield session


async def get_admin_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get a privileged database session for dependency injection."""
    async for session in get_database_manager().get_admin_session():
        yield session
