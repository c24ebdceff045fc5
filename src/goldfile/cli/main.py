"""Command-line interface for goldfile."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from .. import __version__
from ..core.config import DEFAULT_WINDOW_SIZE, GoldenConfig
from ..core.diff import DiffReporter
from ..core.errors import GoldenIOError, VerificationMismatch
from ..core.streams import StreamPair
from ..core.verify import verify_file


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@click.group()
@click.version_option(version=__version__, prog_name="goldfile")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """goldfile: golden-file testing for text and binary output.

    Compare output files against golden references with a colorized diff.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)


@cli.command()
@click.argument("golden", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("actual", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--window-size",
    type=click.IntRange(min=1),
    default=DEFAULT_WINDOW_SIZE,
    show_default=True,
    help="Bytes compared per window.",
)
@click.option(
    "--color/--no-color",
    default=None,
    help="Force colored diff output on or off. Defaults to terminal detection.",
)
def compare(golden: Path, actual: Path, window_size: int, color: bool | None) -> None:
    """Compare ACTUAL against the GOLDEN reference file.

    Files ending in .gz are decompressed before comparing. Exits with
    status 1 and prints the first differing window when they differ.
    """
    config = GoldenConfig(window_size=window_size, color=color)
    reporter = DiffReporter(config.make_console())
    pair = StreamPair(golden_path=golden, staged_path=actual)
    try:
        verify_file(actual, pair, reporter, config.window_size)
    except VerificationMismatch as e:
        raise click.ClickException(
            f"Found at least {e.differences} difference(s) between {golden} and {actual}"
        ) from e
    except GoldenIOError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"{actual} matches {golden}", err=True)


if __name__ == "__main__":
    cli()
