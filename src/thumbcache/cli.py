"""Click CLI for thumbcache — fetch and inspect cached thumbnails."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from thumbcache.config.hierarchy import load_config_hierarchy
from thumbcache.config.schema import ThumbCacheConfig

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, default_level: str = "WARNING") -> None:
    """Configure logging based on verbosity level."""
    level = logging.getLevelName(default_level)
    if not isinstance(level, int):
        level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


def _resolve_config(**overrides: object) -> ThumbCacheConfig:
    try:
        return ThumbCacheConfig.model_validate(load_config_hierarchy(**overrides))
    except ValueError as e:
        error_console.print(f"[red]Invalid configuration:[/red] {e}")
        sys.exit(1)


@click.group()
@click.version_option(package_name="thumbcache")
def cli() -> None:
    """thumbcache — lazy, durable thumbnail cache for feed readers."""


@cli.command()
@click.argument("urls", nargs=-1, required=True)
@click.option("--cache-dir", type=click.Path(file_okay=False), help="Cache directory.")
@click.option("--workers", type=int, default=None, help="Concurrent downloads per batch.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def fetch(urls: tuple[str, ...], cache_dir: str | None, workers: int | None, verbose: int) -> None:
    """Download URLS into the cache as one batch."""
    config = _resolve_config(cache_dir=cache_dir, max_concurrent=workers)
    _setup_logging(verbose, config.log_level)

    from thumbcache.core import ThumbCache

    with ThumbCache(config=config) as cache:
        for url in urls:
            cache.ensure_cached(url)
        queued = len(cache.coordinator.pending)
        report = cache.batch_download().result()

        table = Table(title="Batch Result", show_header=True)
        table.add_column("URL", style="cyan")
        table.add_column("Status")
        table.add_column("Image")
        for url in dict.fromkeys(urls):
            image = cache.lookup(url)
            if url in report.failed:
                status = f"[red]failed ({report.failed[url]})[/red]"
            elif url in report.succeeded:
                status = "[green]downloaded[/green]"
            else:
                status = "cached"
            table.add_row(url, status, _describe(image))

    console.print(table)
    console.print(
        f"Queued {queued}, downloaded {len(report.succeeded)}, failed {len(report.failed)}"
    )
    if report.failed:
        sys.exit(1)


@cli.command()
@click.argument("url")
@click.option("--cache-dir", type=click.Path(file_okay=False), help="Cache directory.")
def lookup(url: str, cache_dir: str | None) -> None:
    """Report whether URL is available from the cache (no network)."""
    config = _resolve_config(cache_dir=cache_dir)

    from thumbcache.core import ThumbCache

    with ThumbCache(config=config) as cache:
        image = cache.lookup(url)
        key = cache.key_for(url)

    if image is None:
        console.print(f"[yellow]Not cached:[/yellow] {url}")
        sys.exit(1)
    console.print(f"[green]Cached:[/green] {url}")
    console.print(f"  Key: {key}")
    console.print(f"  Image: {_describe(image)}")


@cli.command()
@click.argument("url")
def key(url: str) -> None:
    """Print the cache key (file name) for URL."""
    from thumbcache.cache.keys import derive_key

    click.echo(derive_key(url))


@cli.group()
def cache() -> None:
    """Cache management commands."""


@cache.command("stats")
@click.option("--cache-dir", type=click.Path(file_okay=False), help="Cache directory.")
def cache_stats(cache_dir: str | None) -> None:
    """Show cache statistics."""
    config = _resolve_config(cache_dir=cache_dir)

    from thumbcache.core import ThumbCache

    with ThumbCache(config=config) as thumbs:
        stats = thumbs.stats()

    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Directory", str(config.cache_dir))
    table.add_row("Images in memory", str(stats.entries))
    table.add_row("Files on disk", str(stats.disk_files))
    table.add_row("Size on disk (MB)", f"{stats.disk_size_mb:.1f}")

    console.print(table)


def _describe(image: object) -> str:
    from PIL import Image

    from thumbcache.utils.image import describe_image

    if isinstance(image, Image.Image):
        return describe_image(image)
    return "-"


def main() -> None:
    """Entry point for the CLI."""
    cli()
