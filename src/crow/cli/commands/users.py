"""User commands: follow, search, profile."""

from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...exceptions import InvalidCommandError
from ..error_handlers import handle_cli_errors
from ..services import current_session, get_api

console = Console()


@click.command()
@click.argument("user_id")
@click.pass_context
@handle_cli_errors
def follow(ctx: click.Context, user_id: str) -> None:
    """Follow a user, or stop following them."""
    following = get_api(ctx).toggle_follow(user_id)
    if following:
        console.print(f"[green]✓ Following {escape(user_id)}[/green]")
    else:
        console.print(f"[yellow]Stopped following {escape(user_id)}[/yellow]")


@click.command()
@click.argument("query")
@click.pass_context
@handle_cli_errors
def search(ctx: click.Context, query: str) -> None:
    """Find users by name or email."""
    users = get_api(ctx).search_users(query)
    if not users:
        console.print(f"[dim]No users match '{escape(query)}'.[/dim]")
        return

    table = Table(title="Users")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Email")
    table.add_column("Bio")
    for user in users:
        table.add_row(user.id, escape(user.name), escape(user.email), escape(user.bio))
    console.print(table)


@click.command()
@click.argument("user_id")
@click.option("--name", help="New display name")
@click.option("--bio", help="New bio")
@click.option("--avatar", help="New avatar URL")
@click.pass_context
@handle_cli_errors
def profile(
    ctx: click.Context,
    user_id: str,
    name: Optional[str],
    bio: Optional[str],
    avatar: Optional[str],
) -> None:
    """Show a user's profile, or update your own with --name/--bio/--avatar.

    Use "me" as USER_ID for the signed-in user.
    """
    api = get_api(ctx)
    if user_id == "me":
        user_id = current_session(ctx).user_id

    if any(value is not None for value in (name, bio, avatar)):
        if current_session(ctx).user_id != user_id:
            raise InvalidCommandError("profile", "you can only update your own profile")
        api.update_profile(user_id, name=name, bio=bio, avatar=avatar)
        console.print("[green]✓ Profile updated[/green]")

    shown = api.get_profile(user_id)
    table = Table(title=escape(shown.user.name))
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("User ID", shown.user.id)
    table.add_row("Bio", escape(shown.user.bio) or "[dim]None[/dim]")
    table.add_row("Avatar", escape(shown.user.avatar) or "[dim]None[/dim]")
    table.add_row("Followers", str(shown.stats.followers))
    table.add_row("Following", str(shown.stats.following))
    if shown.user.created_at:
        table.add_row("Joined", shown.user.created_at.strftime("%Y-%m-%d"))
    console.print(table)
