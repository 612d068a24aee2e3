"""
Read-only access to posts, used to enrich author lifecycle results.
"""

from collections import defaultdict

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from author_manager.logging import logger
from author_manager.models.post import Post
from author_manager.repositories.base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """Posts listing and the author-to-posts cross-reference."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Post)

    async def load(self) -> list[Post]:
        """
        Get every post, ordered by id.

        Returns:
            List of posts.
        """
        return await self.get_all()

    async def load_authors_xref(self) -> dict[int, list[int]]:
        """
        Map each author id to the ids of the posts attributed to it.

        Computed from the posts table on every call. Post references that
        are not a numeric id are skipped.

        Returns:
            Author id -> post ids, both in ascending order.
        """
        stmt = select(Post.id, Post.authors).order_by(Post.id)
        try:
            result = await self.session.exec(stmt)
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error(f"Error loading post authors: {e}")
            raise

        xref: dict[int, list[int]] = defaultdict(list)
        for post_id, author_ref in rows:
            if not author_ref or not author_ref.strip().isdigit():
                logger.warning(
                    f"Post {post_id} has an invalid author reference: {author_ref!r}"
                )
                continue
            xref[int(author_ref)].append(post_id)

        return dict(sorted(xref.items()))
