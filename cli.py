"""
CLI tool for author management.

Runs the same AuthorLifecycle as the HTTP API against the configured
database, which makes it handy for the SQLite desktop mode and for fixing
data by hand.
"""

import asyncio
import json
from typing import Any, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from author_manager.exceptions import AppException
from author_manager.repositories.author_repository import AuthorRepository
from author_manager.schemas.author import AuthorInput, AuthorRead, AuthorResult
from author_manager.services.author_lifecycle import AuthorLifecycle
from author_manager.storage.db import (
    async_session,
    engine,
    ensure_main_author,
    init_db,
)

# Initialize Typer app with help text
typer_app = typer.Typer(
    name="author-cli",
    help="Author Management CLI - create, update, delete and list authors",
    add_completion=False,
)
console = Console()


def _parse_json(value: str | None, option: str) -> Any:
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as ex:
        raise typer.BadParameter(f"invalid JSON: {ex}", param_hint=option) from ex


def _authors_table(authors: list[AuthorRead]) -> Table:
    table = Table("ID", "Name", "Username", title="Authors", show_lines=True)
    for author in authors:
        table.add_row(str(author.id), author.name, author.username)
    return table


def _print_result(result: AuthorResult) -> None:
    style = "green" if result.status else "red"
    console.print(
        Panel.fit(f"[bold {style}]{result.message}[/bold {style}]", border_style=style)
    )
    if result.authors is not None:
        console.print(_authors_table(result.authors))
    if result.posts_authors is not None:
        table = Table("Author ID", "Post IDs", title="Posts per author")
        for author_id, post_ids in result.posts_authors.items():
            table.add_row(str(author_id), ", ".join(map(str, post_ids)))
        console.print(table)
    if not result.status:
        raise typer.Exit(code=1)


async def _save(data: AuthorInput) -> AuthorResult:
    async with async_session() as session:
        return await AuthorLifecycle(session).save(data)


async def _delete(author_id: int) -> AuthorResult:
    async with async_session() as session:
        return await AuthorLifecycle(session).delete(author_id)


async def _list() -> list[AuthorRead]:
    async with async_session() as session:
        authors = await AuthorRepository(session).load()
        return [AuthorRead.model_validate(a) for a in authors]


async def _init() -> None:
    await init_db()
    await ensure_main_author()


def _run(coro: Any) -> Any:
    async def wrapper() -> Any:
        try:
            return await coro
        finally:
            await engine.dispose()

    try:
        return asyncio.run(wrapper())
    except AppException as ex:
        _fail(ex.message)
    except SQLAlchemyError as ex:
        _fail(f"database error: {ex}")


def _fail(message: str) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    raise typer.Exit(code=2)


@typer_app.command(name="init-db")
def init_db_command():
    """
    Create the tables and the main author (SQLite desktop mode).

    Example:
        python cli.py init-db
    """
    _run(_init())
    console.print("[green]Database initialized[/green]")


@typer_app.command(name="list-authors")
def list_authors():
    """
    Display a table of all authors.

    Example:
        python cli.py list-authors
    """
    console.print(_authors_table(_run(_list())))


@typer_app.command(name="save-author")
def save_author(
    name: str = typer.Option(..., "--name", "-n", help="Display name"),
    author_id: int = typer.Option(
        0, "--id", help="Author ID to update (0 creates a new author)"
    ),
    username: str = typer.Option(
        "", "--username", "-u", help="Username; derived from the name if empty"
    ),
    config: str | None = typer.Option(
        None, "--config", help="Author config as a JSON object"
    ),
    additional_data: str | None = typer.Option(
        None, "--additional-data", help="Additional data as a JSON object"
    ),
):
    """
    Create or update an author.

    Example:
        python cli.py save-author --name "Jane Doe"
        python cli.py save-author --id 2 --name "Jane Doe" --username jane
    """
    try:
        data = AuthorInput(
            id=author_id,
            name=name,
            username=username,
            config=_parse_json(config, "--config"),
            additional_data=_parse_json(additional_data, "--additional-data"),
        )
    except ValidationError as ex:
        _fail("; ".join(error["msg"] for error in ex.errors()))
    _print_result(_run(_save(data)))


@typer_app.command(name="delete-author")
def delete_author(
    author_id: int = typer.Argument(..., help="Author ID to delete"),
):
    """
    Delete an author; its posts are handed to the main author.

    Example:
        python cli.py delete-author 2
    """
    _print_result(_run(_delete(author_id)))


if __name__ == "__main__":
    typer_app()
