"""Database engine and request-scoped sessions for the identity provider store.

Uses service-specific config with fail-fast validation.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
import structlog

from .config import Settings, get_settings

logger = structlog.get_logger(__name__)


def build_engine(settings: Settings) -> AsyncEngine:
    """Engine for ``settings.database_url``.

    Server databases get connection pre-ping so stale pooled connections are
    replaced instead of failing the request; SQLite has no server to lose.
    """
    url = make_url(settings.database_url)
    return create_async_engine(
        url,
        echo=settings.database_echo,
        pool_pre_ping=url.get_backend_name() != "sqlite",
    )


# Get validated settings - will fail fast if DATABASE_URL is not set
settings = get_settings()

engine = build_engine(settings)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Session for one request, rolled back if the database fails mid-request."""
    async with async_session_maker() as session:
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error("db_session_rolled_back", error=str(e), error_type=type(e).__name__)
            raise
