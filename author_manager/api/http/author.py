"""
Author endpoints built on AuthorLifecycle.

Successful mutations answer 200 with the result payload; business-rule
rejections answer 400 with the same payload shape (``status: false`` and the
message code), so clients always read ``message``.
"""

from typing import Any

from fastapi import APIRouter, Response, status

from author_manager.dependencies import AuthorLifecycleDep, AuthorRepoDep
from author_manager.exceptions import NotFoundError
from author_manager.schemas.author import AuthorInput, AuthorRead, AuthorResult
from author_manager.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/authors", tags=["authors"])


def _respond(result: AuthorResult, response: Response) -> dict[str, Any]:
    if not result.status:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return result.to_payload()


@router.get(
    "",
    response_model=list[AuthorRead],
    response_model_by_alias=True,
    summary="Get all authors",
)
@handle_http_errors
async def get_authors(repo: AuthorRepoDep) -> list[AuthorRead]:
    """
    Get the full author listing.

    Args:
        repo: Author repository (injected via dependency).

    Returns:
        Every author, ordered by id.
    """
    return [AuthorRead.model_validate(a) for a in await repo.load()]


@router.get(
    "/{author_id}",
    response_model=AuthorRead,
    response_model_by_alias=True,
    summary="Get one author",
)
@handle_http_errors
async def get_author(author_id: int, repo: AuthorRepoDep) -> AuthorRead:
    """
    Get a single author.

    Raises:
        HTTPException: 404 if the author does not exist.
    """
    author = await repo.get_by_id(author_id)
    if author is None:
        raise NotFoundError(f"Author with ID {author_id} not found")
    return AuthorRead.model_validate(author)


@router.post("", summary="Create or update an author")
@handle_http_errors
async def save_author(
    author_data: AuthorInput,
    response: Response,
    lifecycle: AuthorLifecycleDep,
) -> dict[str, Any]:
    """
    Save an author: ``id`` 0 (or absent) creates, any other id updates.

    Example:
        POST /authors
        {
            "name": "Jane Doe",
            "username": "",
            "config": {"avatar": "jane.png"}
        }
    """
    return _respond(await lifecycle.save(author_data), response)


@router.put("/{author_id}", summary="Update an author")
@handle_http_errors
async def update_author(
    author_id: int,
    author_data: AuthorInput,
    response: Response,
    lifecycle: AuthorLifecycleDep,
) -> dict[str, Any]:
    """
    Update an existing author; the id in the path wins over the body.
    """
    data = author_data.model_copy(update={"id": author_id})
    return _respond(await lifecycle.save(data), response)


@router.delete("/{author_id}", summary="Delete an author")
@handle_http_errors
async def delete_author(
    author_id: int,
    response: Response,
    lifecycle: AuthorLifecycleDep,
) -> dict[str, Any]:
    """
    Delete an author; its posts are handed to the main author.

    Example:
        DELETE /authors/2
    """
    return _respond(await lifecycle.delete(author_id), response)
