"""
Dependency injection configuration for FastAPI.

Example:
    ```python
    from fastapi import APIRouter
    from author_manager.dependencies import AuthorLifecycleDep

    router = APIRouter()

    @router.delete("/authors/{author_id}")
    async def delete_author(author_id: int, lifecycle: AuthorLifecycleDep):
        return (await lifecycle.delete(author_id)).to_payload()
    ```
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from author_manager.repositories.author_repository import AuthorRepository
from author_manager.services.author_lifecycle import AuthorLifecycle
from author_manager.storage.db import get_session

# ============================================================================
# Database Session Dependencies
# ============================================================================

SessionDep = Annotated[AsyncSession, Depends(get_session)]


# ============================================================================
# Repository and Service Dependencies
# ============================================================================


def get_author_repository(session: SessionDep) -> AuthorRepository:
    """
    Get an AuthorRepository bound to the request session.

    Args:
        session: Database session from get_session.

    Returns:
        AuthorRepository instance.
    """
    return AuthorRepository(session)


def get_author_lifecycle(session: SessionDep) -> AuthorLifecycle:
    """
    Get an AuthorLifecycle bound to the request session.

    Args:
        session: Database session from get_session.

    Returns:
        AuthorLifecycle instance.
    """
    return AuthorLifecycle(session)


AuthorRepoDep = Annotated[AuthorRepository, Depends(get_author_repository)]
AuthorLifecycleDep = Annotated[AuthorLifecycle, Depends(get_author_lifecycle)]
