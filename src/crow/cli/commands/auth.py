"""Account commands: login, logout, signup, whoami."""

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...logging import get_logger
from ..error_handlers import handle_cli_errors
from ..services import current_session, get_api, get_session_provider

console = Console()
logger = get_logger(__name__)


@click.command()
@click.option("--email", "-e", prompt=True, help="Account email")
@click.password_option("--password", "-p", confirmation_prompt=False, help="Account password")
@click.pass_context
@handle_cli_errors
def login(ctx: click.Context, email: str, password: str) -> None:
    """Sign in and store the session locally."""
    session = get_session_provider(ctx).sign_in(email.strip(), password)
    console.print(f"[green]✓ Signed in as {escape(session.email or email)}[/green]")


@click.command()
@click.pass_context
@handle_cli_errors
def logout(ctx: click.Context) -> None:
    """Sign out and remove the stored session."""
    get_session_provider(ctx).terminate_session()
    console.print("[green]✓ Signed out[/green]")


@click.command()
@click.option("--email", "-e", prompt=True, help="Account email")
@click.option("--name", "-n", prompt=True, help="Display name")
@click.password_option("--password", "-p", help="Account password")
@click.pass_context
@handle_cli_errors
def signup(ctx: click.Context, email: str, name: str, password: str) -> None:
    """Create an account, then sign in with it."""
    user_id = get_api(ctx).sign_up(email, password, name)
    logger.info("Account created", user_id=user_id)
    get_session_provider(ctx).sign_in(email.strip(), password)
    console.print(f"[green]✓ Welcome, {escape(name.strip())}! You are signed in.[/green]")


@click.command()
@click.pass_context
@handle_cli_errors
def whoami(ctx: click.Context) -> None:
    """Show the signed-in user."""
    session = current_session(ctx)
    profile = get_api(ctx).get_profile(session.user_id)

    table = Table(title="Signed In")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Name", escape(profile.user.name))
    table.add_row("Email", escape(profile.user.email or session.email or ""))
    table.add_row("User ID", session.user_id)
    table.add_row("Followers", str(profile.stats.followers))
    table.add_row("Following", str(profile.stats.following))
    console.print(table)
