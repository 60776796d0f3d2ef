"""Command-line entrypoints for CivicSearch."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from civicsearch.config import get_settings
from civicsearch.identifiers import IdentifierEncoder
from civicsearch.indexer.core import AggregationError, CivicIndexer

console = Console(stderr=True)
logger = logging.getLogger(__name__)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%SZ"),
            "message": record.getMessage(),
            "name": record.name,
        }
        return json.dumps(payload)


def setup_logging(level: str, json_lines: bool = False) -> None:
    """Set up logging with Rich handler or JSON lines."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    if json_lines:
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logging.basicConfig(level=log_level, handlers=[handler], force=True)
    else:
        logging.basicConfig(
            level=log_level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=console, rich_tracebacks=True)],
            force=True,
        )


@click.group()
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override the configured logging level",
)
def main(log_level: Optional[str]) -> None:
    """CivicSearch management commands."""

    settings = get_settings()
    setup_logging(log_level or settings.log_level, settings.log_json)


@main.command()
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the feed to this file instead of stdout",
)
@click.option("--pretty", is_flag=True, default=False, help="Indent the JSON output")
def feed(output: Optional[str], pretty: bool) -> None:
    """Aggregate every source into index documents and emit them as JSON."""

    indexer = CivicIndexer.from_settings(get_settings())
    try:
        result = asyncio.run(indexer.fetch())
    except AggregationError as exc:
        logger.error("Aggregation failed: %s", exc)
        sys.exit(1)

    body = json.dumps(result.to_dict(), indent=2 if pretty else None)
    if output:
        with open(output, "w", encoding="utf-8") as handle:
            handle.write(body + "\n")
        logger.info("Wrote %s documents to %s", len(result.data), output)
    else:
        click.echo(body)

    if result.errors:
        logger.warning("Sources reported %s errors", len(result.errors))


@main.command(name="decode-id")
@click.argument("identifier")
def decode_id(identifier: str) -> None:
    """Print the record ordinal behind a document identifier."""

    ordinal = IdentifierEncoder.from_settings(get_settings()).decode(identifier)
    if ordinal is None:
        raise click.BadParameter(f"not a valid identifier: {identifier}")
    click.echo(str(ordinal))


@main.command()
@click.option("--host", default=None, help="Bind address (defaults to settings)")
@click.option("--port", default=None, type=int, help="Port (defaults to settings)")
def serve(host: Optional[str], port: Optional[int]) -> None:
    """Serve the feed over HTTP."""

    import uvicorn

    from civicsearch.api.app import create_api_app

    settings = get_settings()
    uvicorn.run(
        create_api_app(CivicIndexer.from_settings(settings)),
        host=host or settings.api_host,
        port=port or settings.api_port,
    )


if __name__ == "__main__":
    main()
