from author_manager.repositories.author_repository import AuthorRepository
from author_manager.utils.slug import slugify


class AuthorUniquenessValidator:
    """
    Checks a candidate name and username against all other authors.

    Both checks read storage through the repository and exclude the author
    being saved, so an author never collides with itself.
    """

    def __init__(self, repository: AuthorRepository):
        self.repository = repository

    async def is_name_unique(self, name: str, exclude_id: int) -> bool:
        """
        Check that no other author has exactly this name.

        Storage returns case-insensitive candidates; only an exact match
        against the trimmed name makes it a duplicate.

        Args:
            name: Candidate display name.
            exclude_id: Id of the author being saved (0 for a new one).

        Returns:
            True if the name is free.
        """
        candidate = name.strip()
        matches = await self.repository.find_by_name_except(
            candidate, exclude_id
        )
        return not any(match == candidate for match in matches)

    async def is_username_unique(self, username: str, exclude_id: int) -> bool:
        """
        Check that no other author's username slugs to the same value.

        Args:
            username: Candidate username.
            exclude_id: Id of the author being saved (0 for a new one).

        Returns:
            True if the username is free.
        """
        candidate = slugify(username)
        usernames = await self.repository.find_usernames_except(exclude_id)
        return all(slugify(stored) != candidate for stored in usernames)
