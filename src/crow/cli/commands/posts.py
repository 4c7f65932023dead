"""Post commands: feed, post, delete, like, comments, comment."""

from datetime import datetime
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...exceptions import InvalidCommandError, UserAbortError
from ..error_handlers import handle_cli_errors
from ..services import get_api

console = Console()


def _when(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else ""


@click.command()
@click.option("--limit", "-l", type=int, default=20, show_default=True, help="Number of posts to show")
@click.pass_context
@handle_cli_errors
def feed(ctx: click.Context, limit: int) -> None:
    """Show the latest posts."""
    if limit < 1:
        raise InvalidCommandError("feed", "--limit must be at least 1")

    posts = get_api(ctx).list_posts()[:limit]
    if not posts:
        console.print("[dim]No posts yet.[/dim]")
        return

    table = Table(title="Feed")
    table.add_column("ID", style="dim")
    table.add_column("Author", style="cyan")
    table.add_column("Post")
    table.add_column("Likes", justify="right")
    table.add_column("Comments", justify="right")
    table.add_column("Posted", style="dim")
    for post in posts:
        table.add_row(
            post.id,
            escape(post.user.name if post.user else post.user_id),
            escape(post.content),
            str(post.likes_count),
            str(post.comments_count),
            _when(post.created_at),
        )
    console.print(table)


@click.command()
@click.argument("text")
@click.pass_context
@handle_cli_errors
def post(ctx: click.Context, text: str) -> None:
    """Publish a post (280 characters at most)."""
    created = get_api(ctx).create_post(text)
    console.print(f"[green]✓ Posted[/green] [dim]{created.id}[/dim]")


@click.command()
@click.argument("post_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@handle_cli_errors
def delete(ctx: click.Context, post_id: str, yes: bool) -> None:
    """Delete one of your posts with its likes and comments."""
    if not yes and not click.confirm(f"Delete post {post_id}?", default=False):
        raise UserAbortError("post was not deleted")
    get_api(ctx).delete_post(post_id)
    console.print(f"[green]✓ Deleted post {escape(post_id)}[/green]")


@click.command()
@click.argument("post_id")
@click.pass_context
@handle_cli_errors
def like(ctx: click.Context, post_id: str) -> None:
    """Like a post, or remove your like."""
    liked = get_api(ctx).toggle_like(post_id)
    if liked:
        console.print(f"[green]✓ Liked post {escape(post_id)}[/green]")
    else:
        console.print(f"[yellow]Removed like from post {escape(post_id)}[/yellow]")


@click.command()
@click.argument("post_id")
@click.pass_context
@handle_cli_errors
def comments(ctx: click.Context, post_id: str) -> None:
    """Show the comments on a post, oldest first."""
    items = get_api(ctx).list_comments(post_id)
    if not items:
        console.print("[dim]No comments yet.[/dim]")
        return

    table = Table(title=f"Comments on {escape(post_id)}")
    table.add_column("Author", style="cyan")
    table.add_column("Comment")
    table.add_column("Posted", style="dim")
    for item in items:
        author = item.user.name if item.user else item.user_id
        table.add_row(escape(author), escape(item.content), _when(item.created_at))
    console.print(table)


@click.command()
@click.argument("post_id")
@click.argument("text")
@click.pass_context
@handle_cli_errors
def comment(ctx: click.Context, post_id: str, text: str) -> None:
    """Comment on a post."""
    created = get_api(ctx).add_comment(post_id, text)
    console.print(f"[green]✓ Commented[/green] [dim]{created.id}[/dim]")
