"""
Repository for Author entity with the statements the author lifecycle needs.

It is the only place that touches the authors table and the author
reference column of the posts table. Every statement is built from
SQLAlchemy expressions, so values always travel as bound parameters.

Example:
    ```python
    from author_manager.repositories.author_repository import AuthorRepository
    from author_manager.storage.db import async_session

    async with async_session() as session:
        repo = AuthorRepository(session)
        author = await repo.insert("Jane Doe", "jane-doe", None, None)
        await repo.reassign_posts(author.id, 1)
        await session.commit()
    ```
"""

from typing import Any

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from author_manager.logging import logger
from author_manager.models.author import Author
from author_manager.models.post import Post
from author_manager.repositories.base import BaseRepository

LIKE_ESCAPE_CHAR = "\\"


def escape_like(value: str) -> str:
    """
    Escape LIKE wildcards so the value matches literally.

    Args:
        value: Raw text to match.

    Returns:
        Text safe to use as a LIKE pattern with LIKE_ESCAPE_CHAR.
    """
    return (
        value.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", f"{LIKE_ESCAPE_CHAR}%")
        .replace("_", f"{LIKE_ESCAPE_CHAR}_")
    )


class AuthorRepository(BaseRepository[Author]):
    """
    Repository for Author entity operations.

    Provides the reads used by uniqueness checks, the writes used by the
    author lifecycle and the full author listing.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize Author repository.

        Args:
            session: Database session for executing queries.
        """
        super().__init__(session, Author)

    async def find_by_name_except(
        self, name: str, exclude_id: int
    ) -> list[str]:
        """
        Get names of other authors matching a name case-insensitively.

        Args:
            name: Candidate author name.
            exclude_id: Id of the author being saved (0 for a new one).

        Returns:
            Stored names that match, possibly differing in letter case.
        """
        stmt = select(Author.name).where(
            Author.name.ilike(escape_like(name), escape=LIKE_ESCAPE_CHAR),  # type: ignore[attr-defined]
            Author.id != exclude_id,
        )
        try:
            result = await self.session.exec(stmt)
            return list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Error searching author names: {e}")
            raise

    async def find_usernames_except(self, exclude_id: int) -> list[str]:
        """
        Get usernames of all authors except one.

        Args:
            exclude_id: Id of the author being saved (0 for a new one).

        Returns:
            Stored usernames of every other author.
        """
        stmt = select(Author.username).where(Author.id != exclude_id)
        try:
            result = await self.session.exec(stmt)
            return list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving author usernames: {e}")
            raise

    async def insert(
        self,
        name: str,
        slug: str,
        config: Any,
        additional_data: Any,
    ) -> Author:
        """
        Store a new author.

        Args:
            name: Trimmed display name.
            slug: Normalized username.
            config: Opaque author preferences.
            additional_data: Opaque payload.

        Returns:
            The stored author with its generated id.
        """
        author = Author(
            name=name,
            username=slug,
            password="",
            config=config,
            additional_data=additional_data,
        )
        return await self.create(author)

    async def update(
        self,
        author_id: int,
        name: str,
        slug: str,
        config: Any,
        additional_data: Any,
    ) -> int:
        """
        Overwrite every mutable field of an existing author.

        The password is reset on each update.

        Returns:
            Number of rows updated.
        """
        stmt = (
            update(Author)
            .where(Author.id == author_id)
            .values(
                name=name,
                username=slug,
                password="",
                config=config,
                additional_data=additional_data,
            )
        )
        try:
            result = await self.session.execute(stmt)
            return result.rowcount
        except SQLAlchemyError as e:
            logger.error(f"Error updating author {author_id}: {e}")
            raise

    async def delete(self, author_id: int) -> int:
        """
        Remove an author row.

        Returns:
            Number of rows deleted.
        """
        stmt = delete(Author).where(Author.id == author_id)
        try:
            result = await self.session.execute(stmt)
            return result.rowcount
        except SQLAlchemyError as e:
            logger.error(f"Error deleting author {author_id}: {e}")
            raise

    async def reassign_posts(self, from_id: int, to_id: int) -> int:
        """
        Point every post owned by one author at another.

        Args:
            from_id: Author whose posts are moved.
            to_id: Author receiving the posts.

        Returns:
            Number of posts reassigned.
        """
        stmt = (
            update(Post)
            .where(Post.authors == str(from_id))
            .values(authors=str(to_id))
        )
        try:
            result = await self.session.execute(stmt)
            return result.rowcount
        except SQLAlchemyError as e:
            logger.error(
                f"Error reassigning posts from author {from_id} to {to_id}: {e}"
            )
            raise

    async def load(self) -> list[Author]:
        """
        Get the full author listing.

        Returns:
            Every stored author, ordered by id.
        """
        return await self.get_all()
