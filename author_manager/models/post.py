from sqlmodel import Field, SQLModel


class Post(SQLModel, table=True):
    """
    SQLModel for the posts table.

    Posts are owned by the editor; this service only reads them and
    rewrites the author reference column.

    Attributes:
        id: Primary key identifier
        title: Post title
        slug: Post slug
        authors: Id of the owning author, stored as text
    """

    __tablename__ = "posts"
    __table_args__ = {"extend_existing": True}  # for pydoc

    id: int | None = Field(default=None, primary_key=True)
    title: str = ""
    slug: str = ""
    authors: str = Field(default="1", index=True)
