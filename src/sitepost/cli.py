"""Command line interface for sitepost."""

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from sitepost.config.settings import load_settings
from sitepost.data_primitives.post import Post
from sitepost.exceptions import PostNotFoundError, SitePostError
from sitepost.logging_setup import configure_logging
from sitepost.storage import ParsedPost, PostStorage
from sitepost.utils.datetime_utils import parse_datetime_flexible

app = typer.Typer(
    name="sitepost",
    help="Manage posts and pages of a local static site",
    add_completion=False,
)

console = Console()


@dataclass
class CliState:
    storage: PostStorage


def _storage(ctx: typer.Context) -> PostStorage:
    state: CliState = ctx.obj
    return state.storage


def _fail(message: str) -> typer.Exit:
    console.print(f"[bold red]Error:[/] {message}", soft_wrap=True)
    return typer.Exit(code=1)


def _require(storage: PostStorage, post_id: str) -> Post:
    post = storage.get_by_id(post_id)
    if post is None:
        raise PostNotFoundError(post_id)
    return post


@app.callback()
def main(
    ctx: typer.Context,
    site_root: Annotated[
        Path,
        typer.Option("--site-root", "-s", help="Root directory of the site project"),
    ] = Path(),
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug details, such as files skipped by scans"),
    ] = False,
) -> None:
    """Load site settings for the commands below."""
    configure_logging(verbose=verbose)
    try:
        settings = load_settings(site_root.resolve())
    except SitePostError as e:
        raise _fail(str(e)) from e
    ctx.obj = CliState(storage=PostStorage(settings))


@app.command("list")
def list_posts(
    ctx: typer.Context,
    pages: Annotated[bool, typer.Option("--pages", help="List the pages directory instead")] = False,
) -> None:
    """List every readable post with its date, slug and title."""
    storage = _storage(ctx)
    directory = storage.settings.pages_dir if pages else storage.settings.posts_dir

    table = Table(title=f"Posts in {directory}")
    table.add_column("Date", style="cyan")
    table.add_column("Slug", style="green")
    table.add_column("Title")

    skipped = 0
    for result in storage.scan(directory):
        if isinstance(result, ParsedPost):
            post = result.post
            date = post.effective_date.strftime("%Y-%m-%d") if post.effective_date else "-"
            table.add_row(date, post.slug or "-", post.title)
        else:
            skipped += 1

    console.print(table)
    if skipped:
        typer.echo(f"Skipped {skipped} unreadable file(s)")


@app.command()
def show(
    ctx: typer.Context,
    post_id: Annotated[str, typer.Argument(help="Id stored in the post's front matter")],
) -> None:
    """Show where a post lives and what its front matter holds."""
    storage = _storage(ctx)
    try:
        post = _require(storage, post_id)
    except SitePostError as e:
        raise _fail(str(e)) from e

    typer.echo(f"path: {post.source_path}")
    typer.echo(f"kind: {post.kind.value}")
    typer.echo(f"slug: {post.slug}")
    if not post.is_page:
        url = storage.site_path(post) if post.effective_date is not None else "-"
        typer.echo(f"url: {url}")
    for key, value in storage.to_front_matter(post).items():
        typer.echo(f"{key}: {value}")


@app.command()
def new(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Title of the new post")],
    page: Annotated[bool, typer.Option("--page", help="Create a page instead of a post")] = False,
    slug: Annotated[str | None, typer.Option("--slug", help="Preferred slug (default: from title)")] = None,
    date: Annotated[str | None, typer.Option("--date", help="Publish date (default: now)")] = None,
    body_file: Annotated[
        Path | None,
        typer.Option("--body-file", exists=True, dir_okay=False, help="File holding the post body"),
    ] = None,
) -> None:
    """Create a post with a fresh id and a slug that does not collide on disk."""
    storage = _storage(ctx)
    post = Post(title=title, is_page=page)
    post.ensure_id()
    try:
        if date:
            post.publish_at(parse_datetime_flexible(date))
        post.ensure_date_published()
        if body_file is not None:
            post.contents = storage.fs.read_text(body_file)
        post.slug = storage.find_new_slug(post, slug)
        path = storage.save(post)
    except (SitePostError, OSError) as e:
        raise _fail(str(e)) from e

    typer.echo(f"id: {post.id}")
    typer.echo(f"path: {path}")


@app.command()
def move(
    ctx: typer.Context,
    post_id: Annotated[str, typer.Argument(help="Id stored in the post's front matter")],
    slug: Annotated[str | None, typer.Option("--slug", help="New preferred slug")] = None,
    date: Annotated[str | None, typer.Option("--date", help="New publish date")] = None,
) -> None:
    """Move a post's file to match its slug, date and kind."""
    storage = _storage(ctx)
    try:
        post = _require(storage, post_id)
        if date:
            post.publish_at(parse_datetime_flexible(date))
        if slug:
            post.slug = storage.find_new_slug(post, slug)
        path = storage.relocate(post)
    except (SitePostError, OSError) as e:
        raise _fail(str(e)) from e

    typer.echo(f"path: {path}")


@app.command()
def delete(
    ctx: typer.Context,
    post_id: Annotated[str, typer.Argument(help="Id stored in the post's front matter")],
) -> None:
    """Delete the file backing a post."""
    storage = _storage(ctx)
    try:
        post = _require(storage, post_id)
        path = storage.delete(post)
    except (SitePostError, OSError) as e:
        raise _fail(str(e)) from e

    typer.echo(f"deleted: {path}")
