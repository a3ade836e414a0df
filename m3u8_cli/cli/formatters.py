"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from m3u8_cli.models.stats import DownloadStats
from m3u8_cli.utils.formatting import format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "PlaylistError": [
            "• Check that the --file path points to a local .m3u8 playlist.",
            "• Only lines naming a '<name>.ts' segment are downloaded.",
        ],
        "ConfigurationError": [
            "• Check the options passed on the command line.",
            "• The --header file must be a flat JSON object of strings.",
            "• Run with --show-config to see the defaults in use.",
        ],
        "SegmentWriteError": [
            "• Check that the destination directory is writable.",
            "• Make sure the disk is not full.",
            "• Re-run with --resume to keep the segments already written.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the default settings read from the config file."""
    console = Console()
    if not config_data:
        content = "[dim]No settings found, built-in defaults are used.[/dim]"
    else:
        content = "\n".join(f"{key} = {value}" for key, value in config_data.items())

    console.print(
        Panel(
            content,
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def print_segment_table(segments: list[str], existing: set[str] | None = None):
    """Lists the segments of a playlist, marking those already on disk."""
    console = Console()
    table = Table(box=box.SIMPLE, title=f"[bold]{len(segments)} segments[/bold]")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Segment", style="cyan")
    if existing is not None:
        table.add_column("On disk", justify="center")

    for index, name in enumerate(segments, 1):
        if existing is None:
            table.add_row(str(index), name)
        else:
            status = "[green]✓[/green]" if name in existing else "[dim]–[/dim]"
            table.add_row(str(index), name, status)

    console.print(table)


def print_summary_panel(stats: DownloadStats, duration_s: float):
    """Displays the final summary of the download run."""
    console = Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=20)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("Playlist:", f"{stats.segments_in_playlist} segments")
    if stats.segments_skipped_exists > 0:
        stats_table.add_row(
            "○ Skipped:",
            f"[yellow]{stats.segments_skipped_exists} (already on disk)[/yellow]",
        )
    stats_table.add_row(
        "Scheduled:", f"{stats.segments_scheduled} on {stats.workers} workers"
    )

    if not stats.dry_run:
        stats_table.add_row(
            "✓ Downloaded:", f"[bold green]{stats.segments_written}[/bold green]"
        )

    if stats.segments_failed > 0:
        stats_table.add_row(
            "✗ Failed:", f"[bold red]{stats.segments_failed}[/bold red]"
        )
        shown = ", ".join(stats.failed_segments[:5])
        if stats.segments_failed > 5:
            shown += f", … (+{stats.segments_failed - 5})"
        stats_table.add_row("", f"[red]{shown}[/red]")

    stats_table.add_row("", "")  # Spacer

    if not stats.dry_run:
        stats_table.add_row(
            "Total Size:", f"[cyan]{format_size(stats.bytes_written)}[/cyan]"
        )
        avg_speed = stats.bytes_written / duration_s if duration_s > 0 else 0
        stats_table.add_row(
            "Avg. Speed:", f"[magenta]{format_size(int(avg_speed))}/s[/magenta]"
        )
    stats_table.add_row("Time Elapsed:", f"[blue]{format_duration(duration_s)}[/blue]")

    if stats.dry_run:
        title = "🔍 [bold]Dry Run Summary[/bold]"
        border_color = "yellow"
    elif stats.failed_segments:
        title = "⚠ [bold]Download Incomplete[/bold]"
        border_color = "red"
    else:
        title = "🎬 [bold]Download Complete![/bold]"
        border_color = "green"

    console.print()
    console.print(
        Panel(
            stats_table,
            title=title,
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
    console.print()
