"""Command line entry point for cursorpager."""

import json
import logging
import sys

import click
import yaml
from rich.console import Console
from rich.markup import escape

from cursorpager import __version__
from cursorpager.config import load_config
from cursorpager.exceptions import CursorPagerError
from cursorpager.log import setup_logging

from .client import CursorPaginationClient
from .models import Cursor

console = Console(stderr=True)


def _parse_cursor(value: str) -> Cursor:
    # numeric ids stay numeric so the empty sentinel compares correctly
    try:
        return int(value)
    except ValueError:
        return value


@click.group()
@click.version_option(version=__version__, prog_name="cursorpager")
def cli():
    """Walk cursor-paginated JSON endpoints."""
    pass


@cli.command()
@click.argument("url")
@click.option("--cursor", "-c", default="1", help="Identifier to start after")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON or YAML file with pagination settings",
)
@click.option("--max-retries", type=int, help="Total attempts per page")
@click.option("--retry-delay", type=float, help="Seconds between attempts")
@click.option("--request-timeout", type=float, help="Deadline per request in seconds")
@click.option("--page-delay", type=float, help="Seconds between pages")
@click.option(
    "--max-pages",
    "-p",
    type=int,
    default=-1,
    help="Limit number of pages to fetch (-1 for all)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def fetch(
    url: str,
    cursor: str,
    config_file: str | None,
    max_retries: int | None,
    retry_delay: float | None,
    request_timeout: float | None,
    page_delay: float | None,
    max_pages: int,
    verbose: bool,
):
    """Fetch pages from URL and print their records as JSON lines.

    URL: Endpoint to paginate, the cursor is sent as the `tid` parameter
    """
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    try:
        config = load_config(
            config_file,
            overrides={
                "max_retries": max_retries,
                "retry_delay": retry_delay,
                "request_timeout": request_timeout,
                "page_delay": page_delay,
            },
        )
    except (ValueError, OSError, yaml.YAMLError) as e:
        raise click.BadParameter(str(e), param_hint="config") from e

    console.print(
        f"[bold blue]Paginating {escape(url)}[/bold blue] from cursor {escape(cursor)}"
    )

    pages = 0
    records = 0
    with CursorPaginationClient(config) as client:
        stream = client.paginate(url, _parse_cursor(cursor))
        try:
            for page in stream:
                for record in page:
                    click.echo(json.dumps(record))
                pages += 1
                records += len(page)
                if max_pages != -1 and pages >= max_pages:
                    break
        except CursorPagerError as e:
            console.print(f"[red]✗[/red] {escape(str(e))}")
            sys.exit(1)

    console.print(
        f"[green]✓[/green] Fetched {records} records in {pages} pages, "
        f"last cursor {escape(str(stream.cursor))}"
    )


if __name__ == "__main__":
    cli()
