"""
Base command for encapsulating business operations.

The Command pattern encapsulates business logic as objects, making it
reusable across HTTP and CLI entry points and easy to test in isolation.

Example:
    ```python
    class DeleteAuthorCommand(BaseCommand[int, AuthorResult]):
        def __init__(self, repository: AuthorRepository):
            self.repository = repository

        async def execute(self, author_id: int) -> AuthorResult:
            await self.repository.delete(author_id)
            return AuthorResult.success(AuthorMessage.DELETED)
    ```
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

TInput = TypeVar("TInput")
TOutput = TypeVar("TOutput")


class BaseCommand(ABC, Generic[TInput, TOutput]):
    """
    Base command for business operations.

    Commands encapsulate business logic and depend on repositories for
    data access. They never commit: the caller owns the transaction.

    Type Parameters:
        TInput: Input data type (usually a Pydantic model).
        TOutput: Output data type.
    """

    @abstractmethod
    async def execute(self, input_data: TInput) -> TOutput:
        """
        Execute the command.

        Args:
            input_data: Input data for the command.

        Returns:
            Result of the command execution.

        Raises:
            SQLAlchemyError: When storage fails.
        """
        pass
