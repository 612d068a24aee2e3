"""
Tests for database setup: migrations, main author seeding and the
PostgreSQL id sequence.
"""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from sqlmodel.ext.asyncio.session import AsyncSession

from author_manager.constants import AuthorMessage
from author_manager.models.author import Author
from author_manager.schemas.author import AuthorInput
from author_manager.services.author_lifecycle import AuthorLifecycle
from author_manager.storage.db import (
    SYNC_AUTHOR_ID_SEQUENCE_SQL,
    ensure_main_author,
    sync_author_id_sequence,
)

MIGRATIONS_DIR = (
    Path(__file__).resolve().parents[1] / "author_manager" / "storage" / "migrations"
)


def mock_session_for(dialect_name):
    session = AsyncMock(spec=AsyncSession)
    session.bind = MagicMock()
    session.bind.dialect.name = dialect_name
    session.execute = AsyncMock()
    return session


class TestMigrations:
    """Tests for the alembic revisions."""

    def test_upgrade_then_create_author(self, tmp_path):
        """Test a migrated database seeds the main author and accepts new ones."""
        url = f"sqlite+aiosqlite:///{tmp_path / 'migrated.db'}"
        config = Config()
        config.set_main_option("script_location", str(MIGRATIONS_DIR))
        config.set_main_option("sqlalchemy.url", url)

        command.upgrade(config, "head")

        async def create():
            engine = create_async_engine(url, poolclass=NullPool)
            factory = sessionmaker(
                engine, expire_on_commit=False, class_=AsyncSession
            )
            try:
                async with factory() as session:
                    return await AuthorLifecycle(session).save(
                        AuthorInput(name="Bob")
                    )
            finally:
                await engine.dispose()

        result = asyncio.run(create())

        assert result.message == AuthorMessage.ADDED
        assert [(a.id, a.username) for a in result.authors] == [
            (1, "admin"),
            (2, "bob"),
        ]


class TestMainAuthor:
    """Tests for ensure_main_author."""

    @pytest.mark.asyncio
    async def test_creates_main_author_once(self, db_engine, session_factory):
        """Test the main author is created once and ids continue after it."""
        await ensure_main_author(db_engine)
        await ensure_main_author(db_engine)

        async with session_factory() as session:
            result = await AuthorLifecycle(session).save(AuthorInput(name="Bob"))

        assert result.message == AuthorMessage.ADDED
        assert [a.id for a in result.authors] == [1, 2]

    @pytest.mark.asyncio
    async def test_keeps_existing_main_author(self, db_engine, seeded_factory):
        """Test an existing main author is left untouched."""
        await ensure_main_author(db_engine)

        async with seeded_factory() as session:
            assert (await session.get(Author, 1)).name == "Jane"


class TestAuthorIdSequence:
    """Tests for sync_author_id_sequence."""

    @pytest.mark.asyncio
    async def test_postgres_sequence_moved(self):
        """Test the serial sequence is set to the highest author id."""
        session = mock_session_for("postgresql")

        await sync_author_id_sequence(session)

        session.execute.assert_awaited_once()
        statement = session.execute.call_args.args[0]
        assert str(statement) == SYNC_AUTHOR_ID_SEQUENCE_SQL
        assert "setval" in str(statement)

    @pytest.mark.asyncio
    async def test_sqlite_needs_nothing(self):
        """Test databases without sequences are left alone."""
        session = mock_session_for("sqlite")

        await sync_author_id_sequence(session)

        session.execute.assert_not_called()
