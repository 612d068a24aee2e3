"""
Commands for Author business operations.

Commands validate and write; they do not commit and do not build listings.
AuthorLifecycle runs them inside a transaction and enriches their results.

Example:
    ```python
    from author_manager.commands.author_commands import SaveAuthorCommand
    from author_manager.repositories.author_repository import AuthorRepository
    from author_manager.schemas.author import AuthorInput

    async with async_session() as session:
        command = SaveAuthorCommand(AuthorRepository(session))
        result = await command.execute(AuthorInput(name="Jane Doe"))
        if result.status:
            await session.commit()
    ```
"""

from author_manager.commands.base import BaseCommand
from author_manager.constants import (
    NEW_AUTHOR_ID,
    PROTECTED_AUTHOR_ID,
    AuthorMessage,
)
from author_manager.logging import logger
from author_manager.repositories.author_repository import AuthorRepository
from author_manager.schemas.author import AuthorInput, AuthorResult
from author_manager.services.uniqueness import AuthorUniquenessValidator
from author_manager.utils.slug import slugify


class SaveAuthorCommand(BaseCommand[AuthorInput, AuthorResult]):
    """
    Command to create or update an author.

    Checks run in a fixed order and stop at the first failure: empty name,
    duplicate name, duplicate username. Nothing is written unless all of
    them pass. ``id == 0`` creates, any other id updates.
    """

    def __init__(
        self,
        repository: AuthorRepository,
        validator: AuthorUniquenessValidator | None = None,
    ):
        """
        Initialize command with repository.

        Args:
            repository: Author repository for data access.
            validator: Uniqueness validator. Defaults to one reading the
                same repository.
        """
        self.repository = repository
        self.validator = validator or AuthorUniquenessValidator(repository)

    async def execute(self, input_data: AuthorInput) -> AuthorResult:
        """
        Execute command to save an author.

        Args:
            input_data: Author data to store.

        Returns:
            Result with ``author-added`` or ``author-updated`` on success,
            or the code of the first failed check.

        Example:
            ```python
            result = await command.execute(AuthorInput(id=2, name="Bob"))
            assert result.message == AuthorMessage.UPDATED
            ```
        """
        name = input_data.name.strip()
        if not name:
            return AuthorResult.failure(AuthorMessage.EMPTY_NAME)

        username = input_data.username or ""
        if not slugify(username):
            username = slugify(name)

        if not await self.validator.is_name_unique(name, input_data.id):
            logger.info(f"Rejected duplicate author name '{name}'")
            return AuthorResult.failure(AuthorMessage.DUPLICATE_NAME)

        if not await self.validator.is_username_unique(
            username, input_data.id
        ):
            logger.info(f"Rejected duplicate author username '{username}'")
            return AuthorResult.failure(AuthorMessage.DUPLICATE_USERNAME)

        if input_data.id != NEW_AUTHOR_ID:
            updated = await self.repository.update(
                input_data.id,
                name,
                slugify(username),
                input_data.config,
                input_data.additional_data,
            )
            if not updated:
                logger.warning(
                    f"Author {input_data.id} does not exist, nothing updated"
                )
            return AuthorResult.success(AuthorMessage.UPDATED)

        author = await self.repository.insert(
            name,
            slugify(username),
            input_data.config,
            input_data.additional_data,
        )
        logger.info(f"Created author {author.id} '{author.name}'")
        return AuthorResult.success(AuthorMessage.ADDED)


class DeleteAuthorCommand(BaseCommand[int, AuthorResult]):
    """
    Command to delete an author and hand its posts to the main author.

    The main author can never be deleted. Both writes must be committed
    together by the caller.
    """

    def __init__(self, repository: AuthorRepository):
        """
        Initialize command with repository.

        Args:
            repository: Author repository for data access.
        """
        self.repository = repository

    async def execute(self, author_id: int) -> AuthorResult:
        """
        Execute command to delete an author.

        Args:
            author_id: ID of author to delete.

        Returns:
            Result with ``author-deleted``, or
            ``cannot-delete-main-author`` for the protected author.
        """
        if author_id == PROTECTED_AUTHOR_ID:
            return AuthorResult.failure(
                AuthorMessage.CANNOT_DELETE_MAIN_AUTHOR
            )

        deleted = await self.repository.delete(author_id)
        moved = await self.repository.reassign_posts(
            author_id, PROTECTED_AUTHOR_ID
        )
        if not deleted:
            logger.warning(f"Author {author_id} does not exist")
        logger.info(
            f"Deleted author {author_id}, reassigned {moved} posts "
            f"to author {PROTECTED_AUTHOR_ID}"
        )
        return AuthorResult.success(AuthorMessage.DELETED)
