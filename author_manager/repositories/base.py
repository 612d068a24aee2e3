"""
Base repository with common read and create operations.

The Repository pattern separates data access logic from business logic,
making it easier to test and maintain. Repositories encapsulate all
database operations for a specific entity.

Example:
    ```python
    from author_manager.repositories.base import BaseRepository
    from author_manager.models.post import Post


    class PostRepository(BaseRepository[Post]):
        def __init__(self, session: AsyncSession):
            super().__init__(session, Post)
    ```
"""

from typing import Any, Generic, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from author_manager.logging import logger

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository providing common operations.

    Type Parameters:
        T: The SQLModel type this repository manages.

    Attributes:
        session: The database session for executing queries.
        model: The SQLModel class this repository manages.
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        """
        Initialize repository with session and model.

        Args:
            session: Database session for executing queries.
            model: The SQLModel class to manage.
        """
        self.session = session
        self.model = model

    async def get_by_id(self, id: int) -> T | None:
        """
        Get entity by primary key ID.

        Args:
            id: Primary key value.

        Returns:
            Entity if found, None otherwise.
        """
        return await self.session.get(self.model, id)

    async def get_all(self, **filters: Any) -> list[T]:
        """
        Get all entities matching the provided filters, ordered by id.

        Rows already present in the session are refreshed from the
        database, so listings built after a write reflect stored state.

        Args:
            **filters: Field name and value pairs to filter by.
                Example: get_all(authors="2")

        Returns:
            List of entities matching all filters.

        Raises:
            SQLAlchemyError: If database query fails.
        """
        try:
            stmt = (
                select(self.model)
                .order_by(self.model.id)  # type: ignore[attr-defined]
                .execution_options(populate_existing=True)
            )
            for key, value in filters.items():
                if value is not None:
                    stmt = stmt.where(getattr(self.model, key) == value)
            result = await self.session.exec(stmt)
            return list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model.__name__}: {e}")
            raise

    async def create(self, entity: T) -> T:
        """
        Create new entity in database.

        Args:
            entity: The entity instance to create.

        Returns:
            The created entity with generated fields populated.

        Raises:
            SQLAlchemyError: If database operation fails.
        """
        try:
            self.session.add(entity)
            await self.session.flush()
            await self.session.refresh(entity)
            return entity
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error creating {self.model.__name__}: {e}")
            raise
