"""CLI interface for livesass.

Typer-based command-line interface with Rich output formatting. The
``watch`` command is a minimal host: it compiles once, then checks for
changes on every timer tick.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from livesass import __version__
from livesass.config import (
    CONFIG_FILE,
    LivesassConfig,
    default_config,
    load_config,
    save_config,
)
from livesass.exceptions import LivesassError
from livesass.host import SassHost

__all__ = ["app"]

app = typer.Typer(
    name="livesass",
    help="Live Sass compiler: keeps a css directory in sync with a sass directory.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

ConfigOption = Annotated[
    Path,
    typer.Option("--config", "-c", help="Path to livesass.toml"),
]


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load(config_path: Path) -> tuple[LivesassConfig, Path]:
    """Load config if the file exists, else defaults (root = file's directory)."""
    if config_path.exists():
        return load_config(config_path), config_path.resolve().parent
    return default_config(), Path.cwd()


@app.command()
def version() -> None:
    """Show livesass version."""
    console.print(f"livesass {__version__}")


@app.command()
def init(
    config_path: ConfigOption = Path(CONFIG_FILE),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file"),
    ] = False,
) -> None:
    """Write a default livesass.toml."""
    if config_path.exists() and not force:
        console.print(f"[yellow]{config_path} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(code=0)

    try:
        save_config(default_config(), config_path)
    except LivesassError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e

    console.print(f"[green]Created[/green] {config_path}")


@app.command()
def build(
    config_path: ConfigOption = Path(CONFIG_FILE),
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Compile every stylesheet once and exit."""
    _setup_logging(verbose)
    try:
        config, root = _load(config_path)
        config.reload.enabled = False
        host = SassHost(config)
        host.on_startup(root)
        written = host.on_ready()
    except LivesassError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("file", style="bold")
    table.add_column("bytes", style="dim", justify="right")
    for path in written:
        table.add_row(str(path), str(path.stat().st_size))
    console.print(table)
    console.print(f"[green]Compiled {len(written)} file(s)[/green]")


@app.command()
def watch(
    config_path: ConfigOption = Path(CONFIG_FILE),
    interval: Annotated[
        float,
        typer.Option("--interval", "-i", help="Seconds between change checks", min=0.05),
    ] = 0.5,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Compile, then recompile whenever the sass directory changes."""
    _setup_logging(verbose)
    try:
        config, root = _load(config_path)
        config.reload.enabled = True
        host = SassHost(config)
        manager = host.on_startup(root)
        host.on_ready()
    except LivesassError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e

    if not manager.is_reloading():
        host.shutdown()
        console.print("[yellow]Live reload is unavailable; compiled once.[/yellow]")
        raise typer.Exit(code=1)

    console.print("[dim]Watching for changes. Press Ctrl+C to stop.[/dim]")
    try:
        while True:
            time.sleep(interval)
            host.on_request()
    except KeyboardInterrupt:
        console.print("\nStopped.")
    except LivesassError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e
    finally:
        host.shutdown()


@app.command(name="config")
def config_cmd(
    key: Annotated[
        str | None,
        typer.Argument(help="Config key to show, e.g. paths.sass_dir"),
    ] = None,
    config_path: ConfigOption = Path(CONFIG_FILE),
) -> None:
    """Show effective configuration values."""
    try:
        config, _ = _load(config_path)
    except LivesassError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e

    rows = [
        (f"{section}.{name}", value)
        for section in ("paths", "compiler", "reload")
        for name, value in vars(getattr(config, section)).items()
    ]

    if key is not None:
        matches = [value for name, value in rows if name == key]
        if not matches:
            console.print(f"[red]Unknown config key:[/red] {key}")
            raise typer.Exit(code=1)
        console.print(str(matches[0]))
        return

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", style="bold")
    for name, value in rows:
        table.add_row(name, str(value))
    console.print(table)
