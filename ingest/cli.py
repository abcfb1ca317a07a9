"""
Thumbmark v1 - Command-Line Interface

Command-line interface for managing bookmarks: import and export Netscape
bookmark files, add and delete single bookmarks, and recapture missing
thumbnails.

Usage:
    thumbmark import ~/bookmarks.html
    thumbmark export --output bookmarks.html
    thumbmark add https://example.com
    thumbmark stats ~/bookmarks.html
"""

import sys
from dataclasses import dataclass
from functools import update_wrapper
from pathlib import Path
from typing import NoReturn

import click
import pydantic
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn

from capture_service.capture import BaseCapturer, PlaywrightCapturer
from capture_service.thumbnails import ThumbnailStore
from config import Config, configure_logging, load_env
from shared.errors import (
    CaptureError,
    DuplicateError,
    FormatError,
    StoreError,
    ThumbmarkError,
    ValidationError,
)
from shared.store import BookmarkStore

from . import netscape_codec
from .pipeline import (
    ExportPipeline,
    ImportPipeline,
    ImportSummary,
    add_bookmark,
    delete_bookmark,
    recapture_missing,
)

console = Console()


@dataclass
class Services:
    """Collaborators shared by the store-backed commands"""
    store: BookmarkStore
    thumbnails: ThumbnailStore
    capturer: BaseCapturer

    @classmethod
    def from_config(cls, cfg: Config) -> "Services":
        store = BookmarkStore(cfg.database.path)
        store.init_schema()
        return cls(
            store=store,
            thumbnails=ThumbnailStore(cfg.storage.thumbnail_dir),
            capturer=PlaywrightCapturer.from_settings(cfg.capture),
        )


def fail(message: str, error: Exception) -> NoReturn:
    console.print(f"[red]{message}:[/red] {error}")
    sys.exit(1)


def pass_services(f):
    """
    Pass the command its Services, building them from the loaded Config on
    first use. Commands that never touch the store do not open it.
    """
    @click.pass_context
    def new_func(ctx: click.Context, *args, **kwargs):
        if not isinstance(ctx.obj, Services):
            try:
                ctx.obj = Services.from_config(ctx.obj)
            except StoreError as e:
                fail("Database error", e)
        return ctx.invoke(f, ctx.obj, *args, **kwargs)
    return update_wrapper(new_func, f)


def print_summary(title: str, summary: ImportSummary) -> None:
    results_table = Table(title=title)
    results_table.add_column("Metric", style="cyan")
    results_table.add_column("Count", justify="right", style="green")

    results_table.add_row("Total processed", str(summary.total_processed))
    results_table.add_row("Imported", str(summary.imported))
    results_table.add_row("Duplicates skipped", str(summary.skipped_duplicates))
    results_table.add_row("Capture failures", str(summary.capture_failures))
    results_table.add_row("Errors", str(summary.errors))

    console.print(results_table)

    if summary.error_messages:
        console.print()
        console.print("[yellow]Problems encountered:[/yellow]")
        for error in summary.error_messages[:10]:  # Show first 10 errors
            console.print(f"  - {error}")
        if len(summary.error_messages) > 10:
            console.print(f"  ... and {len(summary.error_messages) - 10} more")


@click.group()
@click.version_option(version="1.0.0")
@click.option("--env-file", default=".env", help="Environment file to load")
@click.pass_context
def cli(ctx: click.Context, env_file: str):
    """Thumbmark - Bookmark Manager with Page Thumbnails"""
    if ctx.obj is None:
        load_env(env_file)
        try:
            cfg = Config()
        except pydantic.ValidationError as e:
            fail("Invalid configuration", e)
        configure_logging(cfg.app.log_level)
        ctx.obj = cfg


@cli.command(name="import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@pass_services
def import_file(services: Services, file: Path):
    """
    Import a Netscape bookmark file.

    Each link is captured and stored in turn; links that fail are skipped.
    """
    console.print(f"\n[bold blue]Thumbmark Import[/bold blue]")
    console.print(f"File: {file}")
    console.print()

    try:
        entries = netscape_codec.decode(file.read_bytes())
    except FormatError as e:
        fail("Failed to parse Netscape bookmark file", e)

    console.print(f"[green]Parsed successfully![/green] {len(entries)} bookmarks found")

    pipeline = ImportPipeline(services.store, services.thumbnails, services.capturer)
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task(f"Capturing {len(entries)} bookmarks...", total=None)
        summary = pipeline.import_entries(entries)
        progress.update(task, completed=True)

    console.print()
    console.print(f"[bold green]Successfully imported {summary.imported_count} new bookmarks[/bold green]")
    print_summary("Import Results", summary)


@cli.command()
@click.option(
    "--output", "-o",
    default="bookmarks.html",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Where to write the bookmark file (default: bookmarks.html)"
)
@pass_services
def export(services: Services, output: Path):
    """Export all bookmarks as a Netscape bookmark file."""
    try:
        exported = ExportPipeline(services.store).run()
    except StoreError as e:
        fail("Failed to get bookmarks", e)

    output.write_bytes(exported.content)
    console.print(f"[green]Exported {services.store.count()} bookmarks to {output}[/green]")


@cli.command()
@click.argument("url")
@pass_services
def add(services: Services, url: str):
    """Capture and add a single bookmark."""
    try:
        bookmark = add_bookmark(url, services.store, services.thumbnails, services.capturer)
    except ValidationError as e:
        fail("Invalid input", e)
    except DuplicateError:
        console.print(f"[yellow]This URL is already bookmarked:[/yellow] {url}")
        sys.exit(1)
    except CaptureError as e:
        fail("Failed to capture screenshot", e)
    except ThumbmarkError as e:
        fail("Failed to add bookmark", e)

    console.print(f"[green]Bookmark added successfully[/green] (id {bookmark.id})")


@cli.command(name="list")
@pass_services
def list_bookmarks(services: Services):
    """List stored bookmarks."""
    try:
        bookmarks = services.store.list_all()
    except StoreError as e:
        fail("Failed to get bookmarks", e)

    if not bookmarks:
        console.print("[yellow]No bookmarks stored yet.[/yellow]")
        return

    table = Table(title="Bookmarks")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("URL", style="green")
    table.add_column("Thumbnail")

    for bookmark in bookmarks:
        table.add_row(str(bookmark.id), bookmark.url, bookmark.thumbnail_ref or "-")

    console.print(table)


@cli.command()
@click.argument("bookmark_id", type=int)
@pass_services
def delete(services: Services, bookmark_id: int):
    """Delete a bookmark and its thumbnail."""
    try:
        removed = delete_bookmark(bookmark_id, services.store, services.thumbnails)
    except ThumbmarkError as e:
        fail("Failed to delete bookmark", e)

    if removed:
        console.print(f"[green]Deleted bookmark {bookmark_id}[/green]")
    else:
        console.print(f"[yellow]No bookmark with id {bookmark_id}[/yellow]")


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def stats(file: Path):
    """
    Show statistics about a bookmark file without importing it.

    Useful for previewing what would be imported.
    """
    console.print(f"\n[bold blue]Bookmark File Statistics[/bold blue]")
    console.print(f"File: {file}")
    console.print()

    try:
        file_stats = netscape_codec.get_stats(file.read_bytes())
    except FormatError as e:
        fail("Failed to parse Netscape bookmark file", e)

    console.print(f"Total bookmarks: {file_stats['total_bookmarks']}")
    console.print(f"Total folders: {file_stats['total_folders']}")
    console.print()

    if file_stats["folders"]:
        table = Table(title="Folders Breakdown")
        table.add_column("Folder", style="cyan")
        table.add_column("Bookmark Count", justify="right", style="green")

        for folder in file_stats["folders"]:
            table.add_row(folder["label"], str(folder["count"]))

        console.print(table)


@cli.command()
@pass_services
def recapture(services: Services):
    """Capture thumbnails for bookmarks that do not have one."""
    try:
        summary = recapture_missing(services.store, services.thumbnails, services.capturer)
    except StoreError as e:
        fail("Failed to get bookmarks", e)

    if summary.total_processed == 0:
        console.print("[green]Every bookmark has a thumbnail.[/green]")
        return

    print_summary("Recapture Results", summary)


@cli.command()
@click.option("--host", default=None, help="Interface to bind (default: APP_HOST)")
@click.option("--port", default=None, type=int, help="Port to bind (default: APP_PORT)")
def serve(host: str | None, port: int | None):
    """Run the web UI."""
    import uvicorn

    cfg = Config()
    uvicorn.run(
        "web_ui.main:app",
        host=host or cfg.app.host,
        port=port or cfg.app.port,
    )


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == "__main__":
    main()
