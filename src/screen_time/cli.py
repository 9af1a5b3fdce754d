"""Command-line interface for the screen-time tracker."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from .config import TrackerSettings
from .paths import get_totals_path
from .server_runner import run_server

app = typer.Typer(help="Foreground, screen-off and unlocked time tracker.")


@app.callback(no_args_is_help=True)
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the bridge."),
    port: int = typer.Option(
        8766, "--port", min=1, max=65535, help="TCP port for the bridge."
    ),
    totals_path: Optional[Path] = typer.Option(
        None, "--data-file", path_type=Path, help="Location of the totals JSON file."
    ),
    status_ms: float = typer.Option(
        100.0,
        "--status-interval",
        min=1.0,
        help="Status refresh interval in milliseconds.",
    ),
) -> None:
    """Run the HTTP bridge that receives lifecycle and screen events."""
    run_server(
        host=host,
        port=port,
        totals_path=totals_path or get_totals_path(),
        settings=TrackerSettings.from_intervals(status_ms=status_ms),
    )


@app.command()
def summary(
    totals_path: Optional[Path] = typer.Option(
        None, "--data-file", path_type=Path, help="Location of the totals JSON file."
    ),
) -> None:
    """Print the saved totals."""
    from .presentation import SummaryPrinter

    SummaryPrinter(totals_path or get_totals_path()).print_summary()


@app.command()
def path() -> None:
    """Print where the totals file is stored."""
    typer.echo(str(get_totals_path()))
