"""CLI interface for mdv.

Command-line entry point that serves a directory of Markdown files.
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
import jinja2

from mdv import __version__
from mdv.config import Config


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Path to configuration file (default: auto-discover mdv.toml)",
)
@click.option(
    "--dir",
    "-d",
    "target_dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory to serve Markdown files from (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to listen on (overrides config)",
)
@click.option(
    "--open/--no-open",
    "-o",
    "open_browser",
    default=None,
    help="Open the default browser once the server is listening",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
@click.version_option(__version__, prog_name="mdv")
def cli(
    config_path: Path | None,
    target_dir: Path | None,
    host: str | None,
    port: int | None,
    open_browser: bool | None,
    verbose: bool,
) -> None:
    """mdv - browse a directory of Markdown files in a two-pane web UI."""
    from mdv.server import run_server

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = (
            Config.load(config_path)
            .with_env()
            .with_overrides(
                host=host,
                port=port,
                open_browser=open_browser,
                target_dir=target_dir,
            )
        )
        root_dir = config.resolve_root()
    except (FileNotFoundError, ValueError) as e:
        _fail(f"Invalid configuration: {e}")

    if config.config_path is not None:
        click.echo(f"Configuration: {config.config_path}")
    click.echo(f"Serving {root_dir} on http://{config.server.host}:{config.server.port}")

    try:
        run_server(config)
    except (OSError, jinja2.TemplateError, ValueError) as e:
        _fail(str(e))


def _fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
