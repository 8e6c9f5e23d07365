"""Async database engine and session factory."""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from club_ladder.config import get_settings


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """Create async database engine.

    Defaults to the configured database URL.
    """
    settings = get_settings()
    return create_async_engine(
        database_url or settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for the stores.

    Instances must stay readable after commit, since each store call closes
    its session before returning.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


engine = create_engine()

async_session_factory = create_session_factory(engine)
