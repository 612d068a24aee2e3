"""
Protocol classes for the collaborators of the author lifecycle.

Protocols define interfaces without requiring explicit inheritance. Any class
that implements the required methods is considered compatible, so listings
can come from the bundled repositories or from another reader.

Example:
    ```python
    from author_manager.protocols import PostsReader


    async def count_posts(reader: PostsReader) -> int:
        return len(await reader.load())
    ```
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from author_manager.models.author import Author
from author_manager.models.post import Post


@runtime_checkable
class AuthorsLister(Protocol):
    """Produces the full, current author listing."""

    async def load(self) -> Sequence[Author]:
        """
        Get all authors.

        Returns:
            Every stored author.
        """
        ...


@runtime_checkable
class PostsReader(Protocol):
    """Produces post listings after an author mutation."""

    async def load(self) -> Sequence[Post]:
        """
        Get all posts.

        Returns:
            Every stored post.
        """
        ...

    async def load_authors_xref(self) -> dict[int, list[int]]:
        """
        Get the author-to-posts cross-reference.

        Returns:
            Author id -> ids of the posts attributed to that author.
        """
        ...
