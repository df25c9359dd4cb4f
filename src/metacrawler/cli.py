"""CLI interface using typer."""

import asyncio
import json
import logging

import httpx
import typer

from .config import settings
from .core import HttpTransport
from .crawler import Crawler
from .errors import ExtractorLoadError, InvalidURIError
from .extractors import HeaderExtractor, StatusExtractor, load_extractor

app = typer.Typer(
    name="metacrawler",
    help="Fetch a web page and extract metadata with pluggable extractors",
    no_args_is_help=True,
)


def create_transport() -> HttpTransport:
    return HttpTransport.from_settings(settings)


async def _fetch(url: str, crawler: Crawler) -> list[dict]:
    """Fetch a URL and return metadata as a list of dicts."""
    async with crawler:
        items = await crawler.fetch(url)
    return [{"name": item.name, "value": item.value} for item in items]


@app.command()
def fetch(
    url: str = typer.Argument(..., help="URL to fetch"),
    extractor: list[str] = typer.Option(
        None, "-e", "--extractor", help="Extractor as module:Name, in priority order (repeatable)"
    ),
    status: bool = typer.Option(False, "--status", help="Include status code and reason"),
    headers: bool = typer.Option(False, "--headers/--no-headers", help="Include response headers"),
    output: str = typer.Option(None, "-o", "--output", help="Output file (JSON)"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show debug logging"),
):
    """Fetch a single URL and print the extracted metadata."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    crawler = Crawler(transport=create_transport())
    try:
        for spec in extractor or []:
            crawler.register_extractor(load_extractor(spec))
    except ExtractorLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    if status:
        crawler.register_extractor(StatusExtractor())
    if headers:
        crawler.register_extractor(HeaderExtractor())

    try:
        result = asyncio.run(_fetch(url, crawler))
    except InvalidURIError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    except httpx.HTTPError as e:
        typer.echo(f"Error fetching {url}: {e}", err=True)
        raise typer.Exit(code=1)

    if output:
        with open(output, "w") as f:
            json.dump(result, f, indent=2, ensure_ascii=False)
        typer.echo(f"Saved to {output}")
    elif not result:
        typer.echo("No metadata found")
    else:
        for item in result:
            typer.echo(f"{item['name']}: {item['value']}")


@app.command()
def version():
    """Show version."""
    from . import __version__

    typer.echo(f"metacrawler {__version__}")


if __name__ == "__main__":
    app()
