"""Shared fixtures for integration tests."""

import pytest
from sqlalchemy import JSON, event
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from club_ladder.db.models import Base, Club, Member
from club_ladder.stores.sql import SqlMatchStore, SqlRankingStore


@pytest.fixture
async def async_engine(tmp_path):
    """Create async SQLite engine for testing.

    The database lives in a file so that every session opened by the
    stores sees the same data.
    """
    # Patch JSONB to use JSON for SQLite
    for table in Base.metadata.tables.values():
        for column in table.columns:
            if isinstance(column.type, JSONB):
                column.type = JSON()

    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'club_ladder.db'}",
        echo=False,
    )

    # Enable foreign keys for SQLite
    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory shared by the stores under test."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(session_factory):
    """Create async session for arranging test data."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def ranking_store(session_factory) -> SqlRankingStore:
    return SqlRankingStore(session_factory)


@pytest.fixture
def match_store(session_factory) -> SqlMatchStore:
    return SqlMatchStore(session_factory)


@pytest.fixture
async def club(db_session: AsyncSession) -> Club:
    """Create a test club."""
    club = Club(telegram_chat_id=123456789, name="Test Tennis Club")
    db_session.add(club)
    await db_session.commit()
    return club


@pytest.fixture
async def other_club(db_session: AsyncSession) -> Club:
    """Create a second club to check tenant isolation."""
    club = Club(telegram_chat_id=987654321, name="Rival Padel Club")
    db_session.add(club)
    await db_session.commit()
    return club


async def _create_member(session: AsyncSession, club: Club, telegram_user_id: int, name: str) -> Member:
    member = Member(
        club_id=club.id,
        telegram_user_id=telegram_user_id,
        display_name=name,
        avatar_url=f"https://example.com/{telegram_user_id}.png",
    )
    session.add(member)
    await session.commit()
    return member


@pytest.fixture
async def alice(db_session: AsyncSession, club: Club) -> Member:
    return await _create_member(db_session, club, 111111, "Alice")


@pytest.fixture
async def bob(db_session: AsyncSession, club: Club) -> Member:
    return await _create_member(db_session, club, 222222, "Bob")


@pytest.fixture
async def carol(db_session: AsyncSession, club: Club) -> Member:
    return await _create_member(db_session, club, 333333, "Carol")


@pytest.fixture
async def outsider(db_session: AsyncSession, other_club: Club) -> Member:
    """Member of the other club."""
    return await _create_member(db_session, other_club, 444444, "Dave")
