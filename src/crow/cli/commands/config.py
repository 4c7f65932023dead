"""Configuration management command."""

import click
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from ...core.config import ConfigManager
from ...core.security import SensitiveDataSanitizer
from ..error_handlers import handle_cli_errors
from ..services import get_config_manager

console = Console()


@click.command()
@click.option("--show", is_flag=True, help="Show current configuration")
@click.option("--reset", is_flag=True, help="Reset configuration to defaults")
@click.pass_context
@handle_cli_errors
def config(ctx: click.Context, show: bool, reset: bool) -> None:
    """Show or reset the configuration.

    \b
    Settings come from the TOML file and CROW_* environment variables:
        CROW_AUTH_URL, CROW_ANON_KEY, CROW_FUNCTIONS_URL,
        CROW_HTTP_TIMEOUT, CROW_SESSION_FILE, CROW_LOGGING_LEVEL
    """
    config_manager = get_config_manager(ctx)

    if reset:
        if Confirm.ask("Are you sure you want to reset all configuration?"):
            config_manager.reset_config()
            console.print("[green]✓ Configuration reset to defaults[/green]")
        return

    show_configuration(config_manager)


def show_configuration(config_manager: ConfigManager) -> None:
    """Display current configuration."""
    config = config_manager.load_config()
    not_set = "[red]Not set[/red]"

    table = Table(title="Crow Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Config File", str(config_manager.config_file))
    table.add_row("Auth URL", config.auth.url or not_set)
    table.add_row(
        "Anon Key",
        SensitiveDataSanitizer.mask_credential(config.auth.anon_key) if config.auth.anon_key else not_set,
    )
    table.add_row("API Base URL", config.api_base_url or not_set)
    table.add_row("HTTP Timeout", f"{config.http.timeout}s")
    table.add_row("Session File", str(config.session.file))
    table.add_row("Log Level", config.logging.level.value)
    table.add_row("Log Format", config.logging.format)
    table.add_row("Log Output", ", ".join(config.logging.output))

    console.print(table)
