"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import os
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import ENV_PHOTO_ROOT
from .di import Container, bootstrap
from .errors import (
    DateNotFoundError,
    FilesystemError,
    MalformedDateKeyError,
    NotConfiguredError,
    PageOutOfRangeError,
    PhotoIndexError,
    PictureNotFoundError,
    SettingsError,
)
from .library.manager import PhotoManager
from .models.types import Picture
from .settings.manager import Settings, SettingsManager
from .utils.logging import configure_logging

app = typer.Typer(help="Browse a folder tree of YYYYMMDD photo directories")
console = Console()


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (
            DateNotFoundError,
            PictureNotFoundError,
            PageOutOfRangeError,
        ) as exc:
            typer.echo(f"Not found: {exc}", err=True)
            raise typer.Exit(1) from exc
        except (FilesystemError, MalformedDateKeyError, NotConfiguredError, SettingsError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except PhotoIndexError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


@app.callback()
def main(
    ctx: typer.Context,
    root: Optional[Path] = typer.Option(None, "--root", "-r", help="Photo root directory"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings file"),
    threshold: Optional[int] = typer.Option(None, "--threshold", min=1, help="Pictures per page"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    """Resolve settings once; commands build the manager lazily."""

    ctx.obj = {"root": root, "config": config, "threshold": threshold, "log_level": log_level}


def _manager(ctx: typer.Context) -> PhotoManager:
    options = ctx.obj or {}
    cached = options.get("manager")
    if cached is not None:
        return cached

    environ = dict(os.environ)
    if options.get("root") is not None:
        environ[ENV_PHOTO_ROOT] = str(options["root"])
    settings_manager = SettingsManager(options.get("config"))
    settings_manager.load()
    settings = Settings.from_manager(settings_manager, environ)
    if options.get("threshold") is not None:
        settings = replace(settings, pagination_threshold=options["threshold"])
    configure_logging(options.get("log_level") or settings.log_level)

    manager = bootstrap(Container(), settings).resolve(PhotoManager)
    options["manager"] = manager
    return manager


def _picture_line(picture: Picture) -> str:
    return f"{picture.display_date}  {picture.rel}"


@app.command()
@_handle_errors
def dates(ctx: typer.Context) -> None:
    """List date folders, newest first."""

    manager = _manager(ctx)
    for key in manager.get_dates():
        count = len(manager.get_pictures_for_date(key))
        console.print(f"{key}  [dim]{count} file(s)[/dim]")


@app.command()
@_handle_errors
def neighbors(ctx: typer.Context, date_key: str) -> None:
    """Show the dates before and after DATE_KEY."""

    references = _manager(ctx).get_date_references(date_key)
    if references is None:
        raise DateNotFoundError(f"Unknown date {date_key!r}")
    console.print(f"older: {references.previous or '-'}")
    console.print(f"newer: {references.next or '-'}")


@app.command()
@_handle_errors
def pages(ctx: typer.Context) -> None:
    """Summarise how dates are packed into pages."""

    table = Table("Page", "Dates", "Pictures")
    for page in _manager(ctx).get_paginated_dates_with_pictures():
        table.add_row(str(page.number), ", ".join(page.date_keys), str(page.picture_count))
    console.print(table)


@app.command()
@_handle_errors
def page(ctx: typer.Context, number: int = typer.Argument(1, help="1-indexed page")) -> None:
    """Print the pictures on page NUMBER."""

    view = _manager(ctx).require_page(number)
    console.print(f"[bold]Page {view.current_page} of {view.total_pages}[/bold]")
    for group in view.groups:
        console.print(f"[green]{group.folder.display_date}[/green]")
        for picture in group:
            console.print(f"  {picture.filename}")


@app.command()
@_handle_errors
def pictures(
    ctx: typer.Context,
    date_key: Optional[str] = typer.Option(None, "--date", "-d", help="Only this date"),
) -> None:
    """List pictures, newest first."""

    manager = _manager(ctx)
    items = manager.get_pictures_for_date(date_key) if date_key else manager.get_pictures()
    for picture in items:
        console.print(_picture_line(picture))


@app.command()
@_handle_errors
def latest(
    ctx: typer.Context,
    amount: Optional[int] = typer.Option(None, "--amount", "-n", min=0, help="How many"),
) -> None:
    """List the most recent pictures."""

    for picture in _manager(ctx).get_latest(amount):
        console.print(_picture_line(picture))


@app.command()
@_handle_errors
def show(ctx: typer.Context, date_key: str, filename: str) -> None:
    """Show one picture with its previous and next pictures."""

    manager = _manager(ctx)
    view = manager.get_picture_view(date_key, filename)
    if view is None:
        raise PictureNotFoundError(f"No picture {filename!r} in {date_key!r}")
    picture = view.picture
    kind = "video" if picture.is_video else "image" if picture.is_image else "file"
    console.print(f"[bold]{picture.rel}[/bold] ({kind}, {picture.display_date})")
    console.print(f"path:     {manager.root / picture.date_key / picture.filename}")
    console.print(f"previous: {view.previous.rel if view.previous else '-'}")
    console.print(f"next:     {view.next.rel if view.next else '-'}")


if __name__ == "__main__":  # pragma: no cover
    app()
