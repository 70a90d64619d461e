"""trawl CLI: scrape pages, extract saved files, start the API server.

Usage:
    trawl scrape https://example.com/news             # Print records as JSON
    trawl scrape URL -s title=h4.name -s price=.cost  # Override selectors
    trawl scrape URL --data-type statistics           # Statistics tables
    trawl scrape URL --format pdf -o out/             # Write a PDF report
    trawl extract page.html --base-url https://example.com/
    trawl serve --port 8000                           # Start the web API
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from trawl.common.exceptions import ScrapeException
from trawl.common.request_manager import FetchSettings
from trawl.data_types import DataType, ScrapeResult
from trawl.export import export_filename, write_json_export, write_report
from trawl.scraper import scrape_document, scrape_url, validate_url

FORMAT_EXTENSIONS = {"json": "json", "pdf": "pdf"}


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def parse_selectors(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    """Turn repeated ``field=selector`` options into a hint mapping.

    Raises:
        click.BadParameter: If an entry has no ``=`` or an empty field name.
    """
    selectors: dict[str, str] = {}
    for value in values:
        field, sep, selector = value.partition("=")
        if not sep or not field.strip():
            raise click.BadParameter(
                f"Expected 'field=selector', got '{value}'"
            )
        selectors[field.strip()] = selector
    return selectors


def emit(
    result: ScrapeResult, output_format: str, output: str | None
) -> None:
    """Print the result, or write it as an export file.

    JSON without ``output`` goes to stdout. A PDF always goes to a file,
    by default in the current directory. When ``output`` names an existing
    directory the file gets the default export name inside it.
    """
    if output is None and output_format == "json":
        click.echo(json.dumps(result.as_dict(), indent=2))
        return

    path = Path(output) if output is not None else Path.cwd()
    if path.is_dir():
        path = path / export_filename(FORMAT_EXTENSIONS[output_format])

    if output_format == "pdf":
        write_report(path, result.data, result.url)
    else:
        write_json_export(path, result.data, result.url)
    click.echo(f"Wrote {result.total_items} items to {path}")


def selector_options(func):
    """Options shared by ``scrape`` and ``extract``."""
    func = click.option(
        "-o",
        "--output",
        type=click.Path(),
        default=None,
        help="Write an export to this file (or directory).",
    )(func)
    func = click.option(
        "--format",
        "output_format",
        type=click.Choice(list(FORMAT_EXTENSIONS)),
        default="json",
        show_default=True,
        help="Output format.",
    )(func)
    func = click.option(
        "--data-type",
        type=click.Choice([member.value for member in DataType]),
        default=None,
        help="Force match or statistics extraction.",
    )(func)
    func = click.option(
        "-s",
        "--selector",
        "selectors",
        multiple=True,
        callback=parse_selectors,
        help="Field selector override as field=selector (repeatable).",
    )(func)
    return func


@click.group()
@click.version_option(package_name="trawl")
def cli() -> None:
    """trawl: heuristic record extraction from HTML pages."""


@cli.command()
@click.argument("url")
@selector_options
@click.option(
    "--timeout",
    type=float,
    default=10.0,
    show_default=True,
    envvar="TRAWL_TIMEOUT",
    help="Seconds to wait for the page.",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
def scrape(
    url: str,
    selectors: dict[str, str],
    data_type: str | None,
    output_format: str,
    output: str | None,
    timeout: float,
    verbose: bool,
) -> None:
    """Fetch URL and extract its records.

    \b
    Examples:
        trawl scrape https://example.com/products
        trawl scrape https://example.com/fixtures --data-type match
        trawl scrape https://example.com/ -s title=h4 -s price=.cost
    """
    configure_logging(verbose)

    try:
        result = scrape_url(
            url,
            selectors,
            DataType(data_type) if data_type else None,
            settings=FetchSettings(timeout=timeout),
        )
    except ScrapeException as e:
        raise click.ClickException(e.message) from e

    emit(result, output_format, output)


@cli.command()
@click.argument(
    "file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "--base-url",
    required=True,
    help="URL the page was saved from, used to resolve relative links.",
)
@selector_options
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
def extract(
    file: Path,
    base_url: str,
    selectors: dict[str, str],
    data_type: str | None,
    output_format: str,
    output: str | None,
    verbose: bool,
) -> None:
    """Extract records from a saved HTML FILE without fetching anything."""
    configure_logging(verbose)

    try:
        url = validate_url(base_url)
        result = scrape_document(
            file.read_bytes(),
            url,
            selectors,
            DataType(data_type) if data_type else None,
        )
    except ScrapeException as e:
        raise click.ClickException(e.message) from e

    emit(result, output_format, output)


@cli.command()
@click.option(
    "--host",
    default="127.0.0.1",
    show_default=True,
    envvar="TRAWL_HOST",
    help="Host to bind the server to.",
)
@click.option(
    "--port",
    default=8000,
    show_default=True,
    type=int,
    envvar="TRAWL_PORT",
    help="Port to bind the server to.",
)
@click.option(
    "--timeout",
    type=float,
    default=10.0,
    show_default=True,
    envvar="TRAWL_TIMEOUT",
    help="Seconds to wait for each upstream page.",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
def serve(host: str, port: int, timeout: float, verbose: bool) -> None:
    """Start the scrape API server."""
    import uvicorn

    from trawl.web.app import create_app

    configure_logging(verbose)

    app = create_app(FetchSettings(timeout=timeout))

    click.echo(f"Starting web server at http://{host}:{port}")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="info" if verbose else "warning",
    )


if __name__ == "__main__":
    cli()
