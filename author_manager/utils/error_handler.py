"""
Error handler decorator converting application exceptions for HTTP.

Business-rule rejections never reach this layer as exceptions; only
storage failures and missing resources do.
"""

from functools import wraps
from typing import Any, Callable

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from author_manager.exceptions import AppException
from author_manager.logging import logger


def handle_http_errors(func: Callable) -> Callable:
    """
    Decorator for HTTP endpoints to convert AppException to HTTPException.

    Args:
        func: The HTTP endpoint function to wrap.

    Returns:
        Wrapped function that handles exceptions.

    Example:
        ```python
        @router.delete("/authors/{author_id}")
        @handle_http_errors
        async def delete_author(author_id: int, lifecycle: AuthorLifecycleDep):
            return await lifecycle.delete(author_id)  # No try/except needed!
        ```
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except AppException as ex:
            logger.warning(
                f"{type(ex).__name__} in {func.__name__}: {ex.message}"
            )
            raise HTTPException(
                status_code=ex.http_status,
                detail=ex.message,
            )
        except SQLAlchemyError as ex:
            logger.error(
                f"Database error in {func.__name__}: {ex}",
                exc_info=True,
            )
            raise HTTPException(
                status_code=500,
                detail="Database error occurred",
            )

    return wrapper
