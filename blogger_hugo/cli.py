"""
Command-line interface for the Blogger export converter.

Uses Typer for argument parsing. The console script points at ``main``,
which maps usage errors and conversion failures to exit code 1.
"""

from __future__ import annotations

from pathlib import Path
import sys

import typer
from rich.console import Console
from rich.markup import escape

from .config import load_config
from .core.errors import ExportError
from .runner import run_pipeline

app = typer.Typer(add_completion=False)
console = Console()
err_console = Console(stderr=True)


@app.command()
def run(
    xmlfile: Path = typer.Argument(..., help="Blogger export XML file."),
    targetdir: Path = typer.Argument(..., help="Directory to write content into."),
    extra: str | None = typer.Option(
        None, "--extra", help="Additional metadata to set in frontmatter."
    ),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    fmt: str | None = typer.Option(
        None, "--format", help="Frontmatter format: toml or yaml."
    ),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Convert a Blogger export into static-site content files.

    Writes one Markdown file per post into TARGETDIR and one file per
    comment into TARGETDIR/comments.

    Args:
        xmlfile: Path to the Blogger export
        targetdir: Output directory, created if missing
        extra: Text appended verbatim to every frontmatter block
        config: Optional path to YAML config file
        fmt: Frontmatter format override
        progress: Whether to show progress bar
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Enable/disable file logging
    """
    cfg = load_config(str(config) if config else None)

    # Override with CLI options
    if extra is not None:
        cfg.output.extra = extra
    if fmt:
        cfg.output.format = fmt
    if log_level:
        cfg.logging.level = log_level
    if log_file is not None:
        cfg.logging.file = log_file

    try:
        stats = run_pipeline(xmlfile, targetdir, cfg, show_progress=progress, console=console)
    except ExportError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    console.print(f"Wrote {stats.posts} published posts to disk.")
    console.print(f"Wrote {stats.drafts} drafts to disk.")
    if stats.orphans:
        console.print(f"Skipped {stats.orphans} comments on deleted posts.")


def main() -> None:
    """Console script entry point.

    Typer exits with 2 on usage errors; the converter reports those as 1,
    like every other failure.
    """
    try:
        app()
    except SystemExit as exc:
        if exc.code == 2:
            sys.exit(1)
        raise
    sys.exit(0)


if __name__ == "__main__":
    main()
