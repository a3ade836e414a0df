"""
Main entry point for the m3u8-cli application.
This module handles top-level setup, exception handling, and CLI invocation.
"""

import logging
import os
import sys

import typer
from rich.console import Console

from m3u8_cli.cli.app import EXIT_FATAL, EXIT_INTERRUPTED, app
from m3u8_cli.cli.formatters import format_error_with_suggestions
from m3u8_cli.exceptions import M3u8CliError


def main() -> None:
    """Main entry point function."""
    if os.name == "nt":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass

    log = logging.getLogger("m3u8_cli")
    console = Console()

    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  Download cancelled by user.[/yellow]")
        sys.exit(EXIT_INTERRUPTED)
    except M3u8CliError as e:
        console.print()
        console.print(format_error_with_suggestions(e))
        sys.exit(EXIT_FATAL)
    except Exception as e:
        console.print()
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(EXIT_FATAL)


if __name__ == "__main__":
    main()
