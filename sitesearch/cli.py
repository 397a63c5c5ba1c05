from __future__ import annotations

import asyncio
import html
import logging
import re

import click

from .config import settings
from .crawler import SearchController
from .fetcher import PageFetcher, build_client
from .schemas import SearchEvent

_TAG = re.compile(r"<[^>]+>")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log every page scanned.")
def cli(verbose: bool) -> None:
    """Search the Complete Works site from the terminal."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s %(levelname)-8s %(name)s – %(message)s",
    )


@cli.command()
@click.argument("query", nargs=-1, required=True)
@click.option("--max-pages", type=int, default=None, help="Stop after this many pages.")
def search(query: tuple[str, ...], max_pages: int | None) -> None:
    """Crawl the site and print every paragraph matching QUERY."""
    text = " ".join(query)
    config = settings
    if max_pages is not None:
        config = settings.model_copy(update={"max_pages": max_pages})

    async def printer(event: SearchEvent) -> None:
        if event.event == "result":
            for item in event.results:
                click.echo(click.style(f"{item.title} – {item.url}", fg="cyan"))
                click.echo(f"  {html.unescape(_TAG.sub('', item.paragraph))}")
        elif event.event == "progress":
            click.echo(click.style(f"[{event.progress:5.1f}%]", dim=True), err=True)
        else:
            click.echo(click.style("✓ Search complete.", fg="green"), err=True)

    async def main() -> None:
        async with build_client(config) as client:
            controller = SearchController(PageFetcher(client), printer, settings=config)
            await controller.search(text)

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        click.echo(click.style("Search interrupted.", fg="yellow"), err=True)


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True)
def serve(host: str, port: int) -> None:
    """Run the HTTP search service."""
    import uvicorn

    uvicorn.run("sitesearch.main:app", host=host, port=port)


if __name__ == "__main__":
    cli()
