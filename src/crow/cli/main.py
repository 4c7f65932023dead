"""Crow CLI main entry point.

Command-line client for the Crow social network: sign in, read the feed,
post, like, comment and follow.
"""

from pathlib import Path
from typing import Optional

import click

from .. import __version__
from ..core.config import ConfigManager
from ..exceptions import ConfigurationError
from ..logging import LoggingConfig, configure_logging, get_logger
from .commands import auth, config, posts, users


def setup_logging(config_file: Optional[Path] = None, verbose: int = 0) -> None:
    """Set up logging from the Crow configuration, raised by ``-v``/``-vv``."""
    try:
        settings = ConfigManager(config_file).load_config().logging
    except ConfigurationError:
        # The command reports the configuration problem itself
        settings = None

    configure_logging(LoggingConfig.for_cli(settings, verbose, __version__))
    logger = get_logger("crow.cli")
    logger.info("Crow CLI started", version=__version__, verbose_level=verbose)


@click.group()
@click.version_option(version=__version__, prog_name="crow")
@click.option(
    "--config", "-c",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file path"
)
@click.option(
    "--verbose", "-v",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG)"
)
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[Path], verbose: int) -> None:
    """Crow: a minimal social network from the command line.

    \b
    Examples:
        crow login
        crow feed --limit 10
        crow post "Hello, Crow!"
        crow like <post-id>
        crow search alice
    """
    setup_logging(config_file, verbose)

    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config_file
    ctx.obj["verbose"] = verbose


cli.add_command(auth.login)
cli.add_command(auth.logout)
cli.add_command(auth.signup)
cli.add_command(auth.whoami)
cli.add_command(posts.feed)
cli.add_command(posts.post)
cli.add_command(posts.delete)
cli.add_command(posts.like)
cli.add_command(posts.comments)
cli.add_command(posts.comment)
cli.add_command(users.follow)
cli.add_command(users.search)
cli.add_command(users.profile)
cli.add_command(config.config)


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
