"""
Pytest configuration and fixtures for testing.

This module provides shared fixtures for database sessions, seeded authors
and posts, and mocked sessions.
"""

import asyncio
import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

# Set required environment variables for testing before importing app modules
os.environ.setdefault("DB_USER", "test-user")
os.environ.setdefault("DB_PASSWORD", "test-password")
os.environ.setdefault(
    "SQLITE_PATH", os.path.join(tempfile.gettempdir(), "author-manager-test.db")
)
os.environ.setdefault(
    "LOG_FILE_PATH",
    os.path.join(tempfile.gettempdir(), "author-manager-errors.log"),
)

from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from author_manager.models import Author, Post  # noqa: E402
from author_manager.storage.db import init_db  # noqa: E402


def seed_rows() -> list:
    """
    Rows shared by the database fixtures.

    Author 1 is the main author, author 2 owns posts 1 and 2.

    Returns:
        list: Authors and posts to add to a session
    """
    return [
        Author(id=1, name="Jane", username="jane"),
        Author(
            id=2,
            name="Bob",
            username="bob",
            password="secret",
            config={"theme": "dark"},
        ),
        Post(id=1, title="First", slug="first", authors="2"),
        Post(id=2, title="Second", slug="second", authors="2"),
        Post(id=3, title="Third", slug="third", authors="1"),
    ]


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """
    Provides an async engine on a fresh SQLite file with all tables.

    Yields:
        AsyncEngine: Engine bound to a temporary database
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'authors.db'}", poolclass=NullPool
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    """
    Provides a session factory configured like the application one.

    Returns:
        sessionmaker: Factory producing AsyncSession objects
    """
    return sessionmaker(db_engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def seeded_factory(session_factory):
    """
    Provides a session factory on a database holding the seed rows.

    Returns:
        sessionmaker: Factory producing AsyncSession objects
    """
    async with session_factory() as session:
        session.add_all(seed_rows())
        await session.commit()
    return session_factory


@pytest_asyncio.fixture
async def session(seeded_factory):
    """
    Provides a session on the seeded database.

    Yields:
        AsyncSession: Open database session
    """
    async with seeded_factory() as db_session:
        yield db_session


@pytest.fixture
def sync_seeded_factory(tmp_path):
    """
    Provides a seeded session factory for synchronous clients.

    TestClient and CliRunner drive their own event loops, so the database
    is prepared with asyncio.run and the engine keeps no pooled connections.

    Yields:
        sessionmaker: Factory producing AsyncSession objects
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'authors.db'}", poolclass=NullPool
    )
    factory = sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    async def prepare():
        await init_db(engine)
        async with factory() as db_session:
            db_session.add_all(seed_rows())
            await db_session.commit()

    asyncio.run(prepare())
    yield factory
    asyncio.run(engine.dispose())


@pytest.fixture
def mock_session():
    """
    Provides a mock AsyncSession for testing.

    Returns:
        AsyncMock: Mocked database session
    """
    db_session = AsyncMock(spec=AsyncSession)
    db_session.add = MagicMock()
    db_session.flush = AsyncMock()
    db_session.refresh = AsyncMock()
    db_session.rollback = AsyncMock()
    db_session.commit = AsyncMock()
    db_session.exec = AsyncMock()
    db_session.execute = AsyncMock()
    db_session.get = AsyncMock()
    return db_session
