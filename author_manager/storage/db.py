import asyncio
from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from author_manager.constants import MAIN_AUTHOR_NAME, PROTECTED_AUTHOR_ID
from author_manager.logging import logger
from author_manager.models import Author
from author_manager.settings import app_settings
from author_manager.utils.slug import slugify

SYNC_AUTHOR_ID_SEQUENCE_SQL = (
    "SELECT setval(pg_get_serial_sequence('authors', 'id'), "
    "(SELECT MAX(id) FROM authors))"
)


def engine_options(database_url: str) -> dict[str, Any]:
    """
    Connection pool options for the given database URL.

    SQLite files are opened per connection, so the PostgreSQL pool
    sizing settings only apply to server databases.
    """
    if database_url.startswith("sqlite"):
        return {}

    return {
        "pool_size": app_settings.DB_POOL_SIZE,
        "max_overflow": app_settings.DB_MAX_OVERFLOW,
        "pool_recycle": app_settings.DB_POOL_RECYCLE,
        "pool_pre_ping": app_settings.DB_POOL_PRE_PING,
    }


engine: AsyncEngine = create_async_engine(
    app_settings.DATABASE_URL,
    echo=False,
    **engine_options(app_settings.DATABASE_URL),
)
async_session = sessionmaker(
    engine, expire_on_commit=False, class_=AsyncSession
)


async def init_db(db_engine: AsyncEngine | None = None) -> None:
    """
    Create all tables that don't exist yet.

    Used for the SQLite desktop mode and tests; server deployments run
    'alembic upgrade head' instead.

    Args:
        db_engine: Engine to create tables on. Defaults to the app engine.
    """
    async with (db_engine or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def ensure_main_author(db_engine: AsyncEngine | None = None) -> None:
    """
    Create the protected main author if it is missing.

    Posts of deleted authors are handed to this author, so it must exist.

    Args:
        db_engine: Engine to write to. Defaults to the app engine.
    """
    session_factory = sessionmaker(
        db_engine or engine, expire_on_commit=False, class_=AsyncSession
    )
    async with session_factory() as session:
        if await session.get(Author, PROTECTED_AUTHOR_ID) is None:
            session.add(
                Author(
                    id=PROTECTED_AUTHOR_ID,
                    name=MAIN_AUTHOR_NAME,
                    username=slugify(MAIN_AUTHOR_NAME),
                )
            )
            await session.flush()
            await sync_author_id_sequence(session)
            await session.commit()
            logger.info("Created the main author")


async def sync_author_id_sequence(session: AsyncSession) -> None:
    """
    Move the PostgreSQL author id sequence past the highest stored id.

    Rows inserted with an explicit id (the main author) do not advance a
    serial sequence, so the next generated id would collide with them.
    Other databases derive new ids from the stored rows and need nothing.

    Args:
        session: Session whose transaction performs the update.
    """
    if session.bind.dialect.name != "postgresql":
        return

    await session.execute(text(SYNC_AUTHOR_ID_SEQUENCE_SQL))


async def wait_and_init_db(
    retry_interval: int | None = None,
    max_retries: int | None = None,
) -> None:
    """
    Wait until the database is available.

    Args:
        retry_interval: Time in seconds between retries.
            Defaults to app_settings.DB_INIT_RETRY_INTERVAL
        max_retries: Maximum number of retries before giving up.
            Defaults to app_settings.DB_INIT_MAX_RETRIES
    """
    if retry_interval is None:
        retry_interval = app_settings.DB_INIT_RETRY_INTERVAL
    if max_retries is None:
        max_retries = app_settings.DB_INIT_MAX_RETRIES
    for attempt in range(max_retries):
        try:
            async with engine.connect() as conn:
                await conn.exec_driver_sql("SELECT 1")
            logger.info("Database is now ready.")
            if app_settings.SQLITE_PATH:
                await init_db()
                await ensure_main_author()
                logger.info("Initialized SQLite tables")
            return
        except OperationalError:
            logger.warning(
                f"Database not ready, retrying in {retry_interval} seconds... (Attempt {attempt + 1}/{max_retries})"
            )
            await asyncio.sleep(retry_interval)

    logger.error("Failed to connect to the database after multiple attempts.")
    raise RuntimeError("Database connection could not be established.")


async def get_session() -> AsyncIterator[AsyncSession]:
    """
    Get an asynchronous session from the SQLAlchemy session factory.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except IntegrityError as ex:
            await session.rollback()
            logger.error(f"Database integrity error: {ex}")
            raise
        except SQLAlchemyError as ex:
            await session.rollback()
            logger.error(f"Database error: {ex}")
            raise
