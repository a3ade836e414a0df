"""
Command-Line Layer.

This package contains the Typer application and the Rich-based output:
the progress display and the panels printed before and after a run.
"""
