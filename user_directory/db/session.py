from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
    AsyncEngine,
)

from user_directory.core.config import settings
from user_directory.core.models import Base


# ----------------------------------------------------------------------
# 1. Database Manager Class
# ----------------------------------------------------------------------

class DatabaseManager:
    """
    Manages the SQLAlchemy AsyncEngine and the AsyncSession factory.

    Encapsulates database connection setup and session creation logic for
    the application. Tests build their own instance against a throwaway
    SQLite file and override `get_session`.
    """

    def __init__(self, db_url: str, **engine_kwargs):
        """
        Initializes the DatabaseManager with the database connection URL.

        Args:
            db_url (str): The connection string for the asynchronous database driver.
            **engine_kwargs: Extra options passed through to `create_async_engine`
                (e.g. `poolclass`).
        """
        engine_kwargs.setdefault("echo", settings.DB_ECHO)
        if not db_url.startswith("sqlite"):
            # Checks connection validity on pool checkout.
            engine_kwargs.setdefault("pool_pre_ping", True)

        self._engine: AsyncEngine = create_async_engine(db_url, **engine_kwargs)

        self._async_session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            class_=AsyncSession,
            expire_on_commit=False,  # Keeps loaded attributes (and the roles collection) usable after commit.
            autoflush=False,
            bind=self._engine,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def async_session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._async_session_factory

    async def create_all(self) -> None:
        """Create every table registered on the declarative Base that does not exist yet."""
        # Register the mapped classes before touching the metadata
        import user_directory.api.v1.models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close every pooled connection. Called on application shutdown."""
        await self._engine.dispose()


# Initialize the DatabaseManager with the URL from settings
db_manager = DatabaseManager(settings.ASYNC_DATABASE_URL)


# ----------------------------------------------------------------------
# 2. FastAPI Dependency
# ----------------------------------------------------------------------

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The session is closed when the request finishes; anything not committed by
    the repository is rolled back on close.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session bound to the database.
    """
    async with db_manager.async_session_factory() as session:
        yield session
