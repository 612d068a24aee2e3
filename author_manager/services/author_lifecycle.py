"""
Author lifecycle: create, update and delete with consistent listings.

AuthorLifecycle owns the transaction around each command. Validation and
write share one transaction and one process-wide lock, delete's two writes
are committed together, and listings are read only after a successful
commit.

Example:
    ```python
    from author_manager.schemas.author import AuthorInput
    from author_manager.services.author_lifecycle import AuthorLifecycle
    from author_manager.storage.db import async_session

    async with async_session() as session:
        lifecycle = AuthorLifecycle(session)
        result = await lifecycle.save(AuthorInput(name="Jane Doe"))
        print(result.to_payload())
    ```
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from author_manager.commands.author_commands import (
    DeleteAuthorCommand,
    SaveAuthorCommand,
)
from author_manager.exceptions import ConflictError, DatabaseError
from author_manager.logging import clear_log_context, logger, set_log_context
from author_manager.protocols import AuthorsLister, PostsReader
from author_manager.repositories.author_repository import AuthorRepository
from author_manager.repositories.post_repository import PostRepository
from author_manager.schemas.author import (
    AuthorInput,
    AuthorRead,
    AuthorResult,
    PostRead,
)
from author_manager.services.uniqueness import AuthorUniquenessValidator

# Serializes check-then-write sequences of every lifecycle running on the
# same event loop. The UNIQUE constraints cover writers in other processes.
_write_lock: asyncio.Lock | None = None
_write_lock_loop: asyncio.AbstractEventLoop | None = None


def get_write_lock() -> asyncio.Lock:
    """
    Get the author write lock of the running event loop.

    An asyncio.Lock belongs to the loop that first waits on it, so a new
    lock is created whenever the process starts another loop (repeated
    asyncio.run calls from the CLI or tests).
    """
    global _write_lock, _write_lock_loop

    loop = asyncio.get_running_loop()
    if _write_lock is None or _write_lock_loop is not loop:
        _write_lock = asyncio.Lock()
        _write_lock_loop = loop
    return _write_lock


class AuthorLifecycle:
    """
    Entry point for author mutations.

    Args:
        session: Database session; its transaction is committed or rolled
            back by every operation.
        authors_lister: Source of the author listing. Defaults to the
            author repository.
        posts_reader: Source of post listings. Defaults to PostRepository.
    """

    def __init__(
        self,
        session: AsyncSession,
        authors_lister: AuthorsLister | None = None,
        posts_reader: PostsReader | None = None,
    ):
        self.session = session
        self.repository = AuthorRepository(session)
        self.validator = AuthorUniquenessValidator(self.repository)
        self.authors_lister = authors_lister or self.repository
        self.posts_reader = posts_reader or PostRepository(session)

    async def save(self, data: AuthorInput) -> AuthorResult:
        """
        Create (``id == 0``) or update an author.

        Args:
            data: Author data.

        Returns:
            Failed result with the first broken rule, or a successful result
            with the refreshed author listing and post cross-reference.

        Raises:
            ConflictError: Storage rejected the write as a duplicate.
            DatabaseError: Storage failed.
        """
        set_log_context(operation="save_author", author_id=data.id)
        try:
            command = SaveAuthorCommand(self.repository, self.validator)
            result = await self._run(lambda: command.execute(data))
            if not result.status:
                return result

            return result.model_copy(
                update={
                    "posts_authors": await self._read(
                        self.posts_reader.load_authors_xref
                    ),
                    "authors": await self._load_authors(),
                }
            )
        finally:
            clear_log_context()

    async def delete(self, author_id: int) -> AuthorResult:
        """
        Delete an author and move its posts to the main author.

        Args:
            author_id: Id of the author to delete.

        Returns:
            Failed result for the main author, or a successful result with
            refreshed posts, post cross-reference and author listing.

        Raises:
            DatabaseError: Storage failed; nothing was changed.
        """
        set_log_context(operation="delete_author", author_id=author_id)
        try:
            command = DeleteAuthorCommand(self.repository)
            result = await self._run(lambda: command.execute(author_id))
            if not result.status:
                return result

            posts = await self._read(self.posts_reader.load)
            return result.model_copy(
                update={
                    "posts": [PostRead.model_validate(p) for p in posts],
                    "posts_authors": await self._read(
                        self.posts_reader.load_authors_xref
                    ),
                    "authors": await self._load_authors(),
                }
            )
        finally:
            clear_log_context()

    async def _run(
        self, operation: Callable[[], Awaitable[AuthorResult]]
    ) -> AuthorResult:
        """
        Run a command in one transaction under the write lock.

        Commits successful results, rolls back rejected ones and converts
        storage failures into application exceptions.
        """
        async with get_write_lock():
            try:
                result = await operation()
                if result.status:
                    await self.session.commit()
                else:
                    await self.session.rollback()
                    logger.info(f"Author operation rejected: {result.message}")
                return result
            except IntegrityError as ex:
                await self.session.rollback()
                logger.error(f"Author write violates a constraint: {ex}")
                raise ConflictError(
                    "Author name or username is already taken"
                ) from ex
            except SQLAlchemyError as ex:
                await self.session.rollback()
                logger.error(f"Author operation failed: {ex}")
                raise DatabaseError("Author storage is unavailable") from ex

    async def _read(self, loader: Callable[[], Awaitable[Any]]) -> Any:
        try:
            return await loader()
        except SQLAlchemyError as ex:
            logger.error(f"Could not load listing after author change: {ex}")
            raise DatabaseError("Author storage is unavailable") from ex

    async def _load_authors(self) -> list[AuthorRead]:
        authors = await self._read(self.authors_lister.load)
        return [AuthorRead.model_validate(a) for a in authors]
