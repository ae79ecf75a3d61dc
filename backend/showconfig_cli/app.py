"""Command line interface for building show configurations from TMDB."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from dotenv import load_dotenv

from backend.showconfig import (
    BuildOptions,
    ListOptions,
    ShowConfigError,
    ShowConfigSettings,
    TMDBClient,
    build_config,
    flatten_languages,
    list_episodes,
)
from backend.showconfig.output import load_previous_config, render

from .client import create_client

logger = logging.getLogger(__name__)

app = typer.Typer(help="Generate show configurations and episode lists from TMDB metadata.")


def _api_key_option() -> typer.Option:
    return typer.Option(
        ...,
        "--api-key",
        "-k",
        help="TMDB API key. See https://www.themoviedb.org/documentation/api.",
        envvar="TMDB_KEY",
    )


def _tv_id_option() -> typer.Option:
    return typer.Option(
        ...,
        "--tv-id",
        "-t",
        help="TV show ID in TMDB, as shown in the show's themoviedb.org URL.",
    )


def _output_path_option() -> typer.Option:
    return typer.Option(
        None,
        "--output-path",
        "-o",
        help="Output file. If omitted, print to stdout instead.",
        dir_okay=False,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log TMDB requests to stderr.", show_default=False
    ),
) -> None:
    """Load .env values and configure logging before running a command."""

    load_dotenv()
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.command()
def build(
    api_key: str = _api_key_option(),
    tv_id: str = _tv_id_option(),
    existing_config: Path = typer.Option(
        ...,
        "--existing-config",
        "-e",
        help="Previous config to copy information not found on TMDB from, such as timing data.",
        dir_okay=False,
    ),
    languages: Optional[List[str]] = typer.Option(
        None,
        "--languages",
        "-l",
        help="Comma-separated language codes (two-letter or language-country). Repeatable. [default: en]",
    ),
    rate_limit: int = typer.Option(
        1, "--rate-limit", "-r", min=1, help="Maximum number of concurrent API requests."
    ),
    output_path: Optional[Path] = _output_path_option(),
    pretty_print: bool = typer.Option(
        True,
        "--pretty-print/--no-pretty-print",
        help="Pretty print JSON output. Otherwise, output will be minified.",
        show_default=True,
    ),
) -> None:
    """Build a multilingual show configuration merged with previous timings."""

    options = BuildOptions(
        api_key=api_key,
        tv_id=tv_id,
        existing_config=existing_config,
        languages=flatten_languages(languages),
        rate_limit=rate_limit,
        output_path=output_path,
        pretty_print=pretty_print,
    )
    settings = ShowConfigSettings()

    try:
        document = asyncio.run(_run_build(options, settings))
    except ShowConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    _emit(document, output_path=options.output_path, pretty=options.pretty_print)


@app.command()
def episodes(
    api_key: str = _api_key_option(),
    tv_id: str = _tv_id_option(),
    output_path: Optional[Path] = _output_path_option(),
    pretty_print: bool = typer.Option(
        False,
        "--pretty-print/--no-pretty-print",
        help="Pretty print JSON output. Otherwise, output will be minified.",
        show_default=True,
    ),
) -> None:
    """List every regular episode of a show with its name and overview."""

    options = ListOptions(
        api_key=api_key,
        tv_id=tv_id,
        output_path=output_path,
        pretty_print=pretty_print,
    )
    settings = ShowConfigSettings()

    try:
        document = asyncio.run(_run_list(options, settings))
    except ShowConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    _emit(document, output_path=options.output_path, pretty=options.pretty_print)


async def _run_build(options: BuildOptions, settings: ShowConfigSettings) -> dict[str, Any]:
    previous = load_previous_config(options.existing_config)
    async with create_client(settings.tmdb_api_base, timeout=settings.request_timeout) as http:
        config = await build_config(TMDBClient(http, options.api_key), options, previous)
    logger.info("Built configuration with %d episode(s)", len(config.episodes))
    return config.to_document()


async def _run_list(options: ListOptions, settings: ShowConfigSettings) -> dict[str, Any]:
    async with create_client(settings.tmdb_api_base, timeout=settings.request_timeout) as http:
        listing = await list_episodes(TMDBClient(http, options.api_key), options)
    logger.info("Listed %d episode(s)", len(listing.entries))
    return listing.to_document()


def _emit(document: dict[str, Any], *, output_path: Path | None, pretty: bool) -> None:
    text = render(document, pretty=pretty)
    if output_path is None:
        typer.echo(text.rstrip("\n"))
        return
    output_path.write_text(text, encoding="utf-8")
    logger.info("Wrote %s", output_path)
