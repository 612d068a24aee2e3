# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from author_manager.api.http.author import router as author_router
from author_manager.api.http.health import router as health_router
from author_manager.logging import logger
from author_manager.storage.db import engine, wait_and_init_db


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application startup and shutdown.

    Startup waits for the database (creating tables in SQLite mode),
    shutdown disposes the connection pool.
    """
    await wait_and_init_db()
    logger.info("Application startup complete")

    yield

    logger.info("Application shutdown initiated")
    await engine.dispose()
    logger.info("Application shutdown complete")


def application() -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    Routers: health and authors.
    """
    app = FastAPI(
        title="Author manager",
        description="Author lifecycle management",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(health_router)
    app.include_router(author_router)

    return app
