"""CLI interface for zzap.

Command-line tool for building and previewing static sites.
"""

import asyncio
import logging
import sys
from pathlib import Path

import click

from zzap.config import Config
from zzap.core.builder import Builder, parse_paths
from zzap.site_module import load_site_module


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (show per-plugin timings)",
)
def cli(verbose: bool) -> None:
    """zzap - static sites from markdown and routes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
    )


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover zzap.toml)",
)
@click.option(
    "--paths",
    default=None,
    help="Comma-separated web paths to rebuild (default: build the whole site)",
)
@click.option(
    "--src-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Source directory (overrides config)",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Output directory (overrides config)",
)
def build(
    config_path: Path | None,
    paths: str | None,
    src_dir: Path | None,
    output_dir: Path | None,
) -> None:
    """Build the site."""
    try:
        config = Config.load(config_path).with_overrides(src_dir=src_dir, output_dir=output_dir)
        config = load_site_module(config)
        result = asyncio.run(Builder(config).run(parse_paths(paths)))
    except Exception as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        if e.__cause__ is not None:
            click.echo(f"Caused by: {e.__cause__!r}", err=True)
        sys.exit(1)

    click.echo(
        click.style(
            f"Built {len(result.pages)} pages in {result.elapsed_ms:.0f}ms",
            fg="green",
        ),
    )
    click.echo(f"Output directory: {config.build.output_dir}")


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover zzap.toml)",
)
@click.option(
    "--host",
    default="127.0.0.1",
    help="Host to bind to (default: 127.0.0.1)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=8080,
    help="Port to bind to (default: 8080)",
)
def preview(config_path: Path | None, host: str, port: int) -> None:
    """Serve the built site."""
    from zzap.preview import run_server

    config = Config.load(config_path)
    output_dir = config.build.output_dir
    if not output_dir.is_dir():
        click.echo(
            click.style(
                f"Error: output directory {output_dir} not found, run 'zzap build' first",
                fg="red",
            ),
            err=True,
        )
        sys.exit(1)

    click.echo(f"Serving {output_dir} on http://{host}:{port}")
    run_server(output_dir, host=host, port=port)


if __name__ == "__main__":
    cli()
