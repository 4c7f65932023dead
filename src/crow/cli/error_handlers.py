"""
Centralized error handling for the CLI.

Maps the exception hierarchy to console messages and exit codes:

    0  success
    1  API error, command usage error, system or unexpected error
    2  session error (the user has to log in again)
    3  configuration error
    4  network or auth service failure (try again later)
"""

import functools
import sys

import click
from rich.console import Console
from rich.markup import escape

from ..exceptions import (
    ApiError,
    AuthError,
    CLIError,
    ConfigurationError,
    CrowError,
    CrowNetworkError,
    SessionProviderError,
    SessionStoreError,
    UserAbortError,
)
from ..exceptions.templates import RecoverySuggestions
from ..logging import get_logger

console = Console()

EXIT_API_ERROR = 1
EXIT_SESSION_ERROR = 2
EXIT_CONFIG_ERROR = 3
EXIT_NETWORK_ERROR = 4


def handle_cli_errors(func):
    """Decorator to handle all CLI errors with proper formatting and exit codes."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            _handle_keyboard_interrupt()
        except (AuthError, SessionStoreError) as e:
            _handle_session_error(e)
        except ApiError as e:
            if e.status_code == 401:
                _handle_session_error(e)
            _handle_api_error(e)
        except (CrowNetworkError, SessionProviderError) as e:
            _handle_network_error(e)
        except ConfigurationError as e:
            _handle_configuration_error(e)
        except CLIError as e:
            _handle_cli_error(e)
        except CrowError as e:
            _handle_crow_error(e)
        except (click.ClickException, click.Abort, click.exceptions.Exit):
            # Usage errors and aborted prompts are rendered by click
            raise
        except OSError as e:
            _handle_system_error(e)
        except Exception as e:
            _handle_unexpected_error(e)
    return wrapper


def _print_error(message: str, style: str = "red"):
    console.print(f"[{style}]{escape(message)}[/{style}]")


def _print_help(message: str):
    console.print(f"[blue]{escape(message)}[/blue]")


def _print_action(message: str):
    console.print(f"[green]Action: {escape(message)}[/green]")


def _print_error_id(error_id: str):
    console.print(f"[dim]Error ID: {error_id}[/dim]")


def _log(e: CrowError, msg: str):
    logger = get_logger("crow.cli.error", e.correlation_id)
    logger.error(msg, error_dict=e.to_dict())


def _handle_keyboard_interrupt():
    _print_error("\nOperation cancelled by user", "yellow")
    sys.exit(1)


def _handle_session_error(e: CrowError):
    """Any failure that leaves the user signed out."""
    _print_error(f"Session Error: {e.message}")
    _print_help(e.help_text or RecoverySuggestions.LOGIN_AGAIN)
    _print_action(e.user_action or RecoverySuggestions.LOGIN_ACTION)
    if e.technical_details:
        console.print(f"[dim]Details: {escape(e.technical_details)}[/dim]")
    _print_error_id(e.correlation_id)
    _log(e, "Session error occurred")
    sys.exit(EXIT_SESSION_ERROR)


def _handle_network_error(e: CrowError):
    _print_error(f"Connection Error: {e.message}")
    _print_help(RecoverySuggestions.TRY_AGAIN_LATER)
    _print_error_id(e.correlation_id)
    _log(e, "Connection error occurred")
    sys.exit(EXIT_NETWORK_ERROR)


def _handle_configuration_error(e: ConfigurationError):
    _print_error(f"Configuration Error: {e.message}")
    if e.help_text:
        _print_help(e.help_text)
    _log(e, "Configuration error occurred")
    sys.exit(EXIT_CONFIG_ERROR)


def _handle_api_error(e: ApiError):
    _print_error(f"Error: {e.reason}")
    if e.status_code is not None:
        console.print(f"[dim]HTTP {e.status_code}[/dim]")
    _log(e, "API error occurred")
    sys.exit(EXIT_API_ERROR)


def _handle_cli_error(e: CLIError):
    style = "yellow" if isinstance(e, UserAbortError) else "red"
    _print_error(e.message, style)
    if e.help_text:
        _print_help(e.help_text)
    _log(e, "CLI error occurred")
    sys.exit(1)


def _handle_crow_error(e: CrowError):
    """Handle any other Crow exception with full context."""
    _print_error(f"Error: {e.message}")
    if e.help_text:
        _print_help(e.help_text)
    if e.context:
        items = [f"{k}: {v}" for k, v in e.context.items() if v is not None]
        if items:
            console.print(f"[dim]Context: {escape(', '.join(items))}[/dim]")
    _print_error_id(e.correlation_id)
    _log(e, "Crow error occurred")
    sys.exit(1)


def _handle_system_error(e: OSError):
    """Local file or socket failures outside the Crow error hierarchy."""
    _print_error(f"System Error: {e}")
    _print_help("Check file permissions, disk space and the session file location")
    get_logger("crow.cli.error").error("System error occurred", error_type=type(e).__name__, error=str(e))
    sys.exit(1)


def _handle_unexpected_error(e: Exception):
    _print_error(f"Unexpected Error: {type(e).__name__}: {e}")
    console.print("[yellow]This may be a bug. Run again with -vv and include the log when reporting it.[/yellow]")
    logger = get_logger("crow.cli.error")
    logger.error("Unexpected error occurred", error_type=type(e).__name__, error=str(e))
    logger.debug("Unexpected error traceback", exc_info=True)
    sys.exit(1)
