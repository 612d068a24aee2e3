from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class Author(SQLModel, table=True):
    """
    SQLModel representing an author entity in the database.

    This is a clean data model without Active Record methods.
    Use AuthorRepository for all database operations.

    Attributes:
        id: Primary key identifier assigned by storage
        name: Display name, unique among authors
        username: URL-safe slug, unique among authors
        password: Always empty; credentials are not managed here
        config: Opaque author preferences, stored verbatim
        additional_data: Opaque payload, stored verbatim
    """

    __tablename__ = "authors"
    __table_args__ = {"extend_existing": True}  # for pydoc

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(unique=True)
    username: str = Field(unique=True)
    password: str = ""
    config: Any = Field(default=None, sa_column=Column(JSON))
    additional_data: Any = Field(
        default=None, sa_column=Column(JSON)
    )
