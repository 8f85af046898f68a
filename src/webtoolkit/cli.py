"""Command-line interface for webtoolkit.

Exposes the request-independent helpers for scripting and for checking how
the toolkit will treat a given file or string.
"""

from pathlib import Path
from typing import NoReturn

import click

from webtoolkit import __version__
from webtoolkit.core.config import get_config
from webtoolkit.core.exceptions import ToolkitError
from webtoolkit.core.logging import configure_logging
from webtoolkit.domain.services.content_sniffer import SNIFF_LENGTH, detect_content_type
from webtoolkit.toolkit import Toolkit


@click.group()
@click.version_option(version=__version__, prog_name="webtoolkit")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides WEBTOOLKIT_LOG_LEVEL)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """webtoolkit - helpers for FastAPI and Starlette handlers."""
    config = get_config().model_copy()
    if log_level:
        config.log_level = log_level
    configure_logging(config)
    ctx.obj = Toolkit(config)


@cli.command("random-string")
@click.argument("length", type=click.IntRange(min=0))
@click.pass_obj
def random_string(toolkit: Toolkit, length: int) -> None:
    """Print LENGTH random characters."""
    click.echo(toolkit.random_string(length))


@cli.command()
@click.argument("text")
@click.pass_obj
def slugify(toolkit: Toolkit, text: str) -> None:
    """Print the slug of TEXT."""
    try:
        click.echo(toolkit.slugify(text))
    except ToolkitError as e:
        raise click.ClickException(e.message) from e


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_obj
def mkdir(toolkit: Toolkit, path: Path) -> None:
    """Create PATH and any missing parent directories."""
    try:
        created = toolkit.create_dir_if_not_exists(path)
    except ToolkitError as e:
        raise click.ClickException(e.message) from e
    click.echo(str(created))


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def sniff(toolkit: Toolkit, file: Path) -> None:
    """Print the sniffed MIME type of FILE and whether uploads would accept it."""
    with open(file, "rb") as f:
        sample = f.read(SNIFF_LENGTH)
    detected = detect_content_type(sample)
    allowed = toolkit.config.is_mime_type_allowed(detected)
    click.echo(f"{detected}\t{'allowed' if allowed else 'not permitted'}")


@cli.command()
@click.pass_obj
def info(toolkit: Toolkit) -> None:
    """Display the effective toolkit configuration."""
    config = toolkit.config
    allowed = ", ".join(config.allowed_mime_types) or "(any)"

    click.echo(f"""
webtoolkit v{__version__}
{'=' * 40}

Uploads:
  Max Size:     {config.max_file_size} bytes
  MIME Types:   {allowed}

JSON:
  Max Size:     {config.max_json_size} bytes
  Unknown Keys: {'allowed' if config.allow_unknown_fields else 'rejected'}

Logging:
  Level:        {config.log_level}
  Format:       {config.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `webtoolkit` command is run
    or when using `python -m webtoolkit`.
    """
    cli()


if __name__ == "__main__":
    main()
