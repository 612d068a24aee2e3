from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from author_manager.constants import NEW_AUTHOR_ID, AuthorMessage


class AuthorInput(BaseModel):  # type: ignore[misc]
    """
    Raw author data supplied by a caller, frozen once constructed.

    The name is trimmed here, so whitespace-only names arrive as ``""``.
    ``id == 0`` means the author does not exist yet.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(
        default=NEW_AUTHOR_ID, ge=0, description="0 for a new author"
    )
    name: str = Field(default="", description="Display name")
    username: str | None = Field(
        default="", description="Slug; derived from name when empty"
    )
    config: Any = None
    additional_data: Any = Field(
        default=None, alias="additionalData"
    )

    @field_validator("name", mode="before")
    @classmethod
    def trim_name(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value


class AuthorRead(BaseModel):  # type: ignore[misc]
    """Public view of a stored author (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    username: str
    config: Any = None
    additional_data: Any = Field(
        default=None, serialization_alias="additionalData"
    )


class PostRead(BaseModel):  # type: ignore[misc]
    """Public view of a post and the author it is attributed to."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    authors: str


class AuthorResult(BaseModel):  # type: ignore[misc]
    """
    Outcome of an author lifecycle operation.

    Business-rule rejections carry ``status=False`` and only a message code.
    Successful operations also carry the listings refreshed after the write.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: bool
    message: AuthorMessage
    authors: list[AuthorRead] | None = None
    posts: list[PostRead] | None = None
    posts_authors: dict[int, list[int]] | None = Field(
        default=None, alias="postsAuthors"
    )

    @classmethod
    def failure(cls, message: AuthorMessage) -> "AuthorResult":
        return cls(status=False, message=message)

    @classmethod
    def success(cls, message: AuthorMessage) -> "AuthorResult":
        return cls(status=True, message=message)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the wire shape expected by the editor UI."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
