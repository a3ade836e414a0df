"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from m3u8_cli import __version__
from m3u8_cli.core.download_manager import DownloadManager
from m3u8_cli.exceptions import M3u8CliError
from m3u8_cli.storage.config_manager import ConfigManager
from m3u8_cli.utils.playlist import load_playlist

from .formatters import (
    format_error_with_suggestions,
    print_config,
    print_segment_table,
    print_summary_panel,
)
from .progress_manager import ProgressManager

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2
EXIT_INTERRUPTED = 130

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("m3u8_cli")

app = typer.Typer(
    name="m3u8-cli",
    help=(
        "A concurrent downloader for the segments of an M3U8 playlist. Use"
        " 'm3u8-cli <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "m3u8-cli"


CONFIG_FILE = get_config_dir() / "config.ini"


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    config: Path = typer.Option(  # noqa: B008
        CONFIG_FILE,
        "--config",
        help="INI file holding default settings (workers, timeout, dest, ...).",
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the default settings and exit."
    ),
):
    """M3U8 segment downloader"""
    if version:
        console.print(f"[bold]m3u8-cli[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("m3u8_cli").setLevel(log_level)

    ctx.obj = {"config_file": config}

    if show_config:
        try:
            defaults = ConfigManager(config).load_defaults()
        except M3u8CliError as e:
            console.print(format_error_with_suggestions(e))
            raise typer.Exit(code=EXIT_FATAL) from e
        print_config(config, defaults)
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def _config_file(ctx: typer.Context) -> Path:
    return (ctx.obj or {}).get("config_file", CONFIG_FILE)


@app.command(name="download")
def download_command(
    ctx: typer.Context,
    file: Path = typer.Option(  # noqa: B008
        ..., "-f", "--file", help="The local path of the m3u8 file."
    ),
    url: str = typer.Option(
        ..., "-u", "--url", help="The base URL the segments are resolved against."
    ),
    dest: str | None = typer.Option(
        None, "-d", "--dest", help="The output directory (default: ./)."
    ),
    jobs: int | None = typer.Option(
        None, "-j", "--jobs", help="Number of concurrent workers (default: 8)."
    ),
    header: str | None = typer.Option(
        None,
        "--header",
        help="A JSON file of HTTP request headers sent with every segment request.",
    ),
    resume: bool = typer.Option(
        False,
        "-r",
        "--resume",
        help="Skip segments that already exist in the output directory.",
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Per-request timeout in seconds (default: 60)."
    ),
    queue_size: int | None = typer.Option(
        None,
        "--queue-size",
        help="Maximum fetched segments held in memory (default: 0, unbounded).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show how the segments would be split between workers and exit.",
    ),
    no_progress: bool = typer.Option(
        False, "--no-progress", help="Do not display the progress bar."
    ),
):
    """Download the segments of an M3U8 playlist."""
    cli_options = {
        "playlist_path": file,
        "base_url": url,
        "dest": dest,
        "workers": jobs,
        "header": header,
        "resume": resume,
        "timeout": timeout,
        "queue_size": queue_size,
        "dry_run": dry_run,
    }

    try:
        job = ConfigManager(_config_file(ctx)).load_job(cli_options)
    except M3u8CliError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=EXIT_FATAL) from e

    async def _download_async():
        async with ProgressManager(
            console=console, enabled=not (no_progress or job.dry_run)
        ) as progress_manager:
            manager = DownloadManager(job, progress_manager)
            return await manager.execute()

    start_time = time.monotonic()
    try:
        stats = asyncio.run(_download_async())
    except M3u8CliError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=EXIT_FATAL) from e
    except KeyboardInterrupt as e:
        console.print("\n[yellow]⚠️  Download cancelled by user.[/yellow]")
        raise typer.Exit(code=EXIT_INTERRUPTED) from e
    duration = time.monotonic() - start_time

    print_summary_panel(stats, duration)
    if stats.failed_segments:
        log.warning(
            f"[yellow]⚠ {stats.segments_failed} segments could not be downloaded."
            " Re-run with --resume to fetch only the missing ones.[/yellow]"
        )
        raise typer.Exit(code=EXIT_PARTIAL)


@app.command(name="segments")
def segments_command(
    file: Path = typer.Argument(  # noqa: B008
        ..., help="The local path of the m3u8 file."
    ),
    dest: Path | None = typer.Option(  # noqa: B008
        None,
        "-d",
        "--dest",
        help="Also show which segments already exist in this directory.",
    ),
):
    """List the segments referenced by a playlist without downloading them."""
    try:
        segments = load_playlist(file)
    except M3u8CliError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=EXIT_FATAL) from e

    existing = None
    if dest is not None:
        existing = {name for name in segments if (dest / name).exists()}
    print_segment_table(segments, existing)
