"""
Main pipeline orchestration for the Blogger export converter.

This module coordinates the entire workflow:
1. Prepare the target directory
2. Parse the Atom export
3. Classify every entry
4. Build the post index and the comment tree, flatten each post's tree
5. Render every comment and every post to disk

Resolution always finishes before any file is written, since a post's
frontmatter needs its complete, ordered comment list.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)

from .config import AppConfig, OutputConfig
from .core.classify import classify
from .core.errors import ConfigError, FeedFormatError, OutputError, TreeIntegrityError
from .core.identifiers import resolve_slug
from .core.tree import resolve_tree
from .core.types import Entry, Kind
from .input.atom_parser import parse_blogger_xml
from .output.renderer import FORMATS, write_comment, write_post
from .utils.logging import log_event, setup_logging


@dataclass
class RunStats:
    """Counts collected during a conversion run.

    Attributes:
        posts: Published posts written
        drafts: Draft posts written
        comments: Comment files written
        orphans: Comments whose parent could not be resolved
        unreachable: Comments below an orphan, listed on no post
        ignored: Entries that are neither posts nor comments
    """

    posts: int = 0
    drafts: int = 0
    comments: int = 0
    orphans: int = 0
    unreachable: int = 0
    ignored: int = 0


def validate_config(cfg: AppConfig) -> None:
    """Reject unsupported settings before anything touches the disk."""
    if cfg.output.format not in FORMATS:
        raise ConfigError(
            f"Unsupported frontmatter format {cfg.output.format!r}; "
            f"expected one of: {', '.join(FORMATS)}"
        )
    if cfg.logging.format not in ("jsonl", "plain"):
        raise ConfigError(f"Unsupported log file format {cfg.logging.format!r}")
    if not isinstance(cfg.output.render_concurrency, int) or cfg.output.render_concurrency < 1:
        raise ConfigError("render_concurrency must be a positive integer")


def prepare_output_dir(output_dir: Path, comments_dir: str = "comments") -> None:
    """Create the target directory and its comments subdirectory.

    Raises:
        OutputError: If the path exists but is not a directory
    """
    if output_dir.exists() and not output_dir.is_dir():
        raise OutputError(f"{output_dir} is not a directory.")
    try:
        (output_dir / comments_dir).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputError(f"Cannot create {output_dir / comments_dir}: {exc}") from exc


def resolve_entries(entries: list[Entry], extra: str | None = None) -> RunStats:
    """Classify entries and populate every derived field in place.

    Raises:
        FeedFormatError: If the feed holds no entries or no posts
        TreeIntegrityError: If a comment names a parent that was never seen
    """
    if not entries:
        raise FeedFormatError("No blog entries found!")

    stats = RunStats()
    for entry in entries:
        entry.kind = classify(entry)
        if entry.kind is Kind.POST:
            entry.slug = resolve_slug(entry)
        if entry.kind in (Kind.POST, Kind.COMMENT):
            entry.extra = extra
        else:
            stats.ignored += 1

    if not any(entry.kind is Kind.POST for entry in entries):
        raise FeedFormatError("No blog posts found!")

    tree = resolve_tree(entries)
    stats.orphans = len(tree.orphans)
    stats.unreachable = len(tree.unreachable)
    return stats


def render_entries(
    entries: list[Entry],
    output_dir: Path,
    cfg: OutputConfig,
    stats: RunStats,
    on_written: Callable[[], None] | None = None,
) -> RunStats:
    """Write every comment and post. Write order carries no meaning."""
    jobs: list[tuple[Entry, Callable[[], Path]]] = []
    for entry in entries:
        if entry.kind is Kind.COMMENT:
            jobs.append((entry, _comment_job(entry, output_dir, cfg)))
        elif entry.kind is Kind.POST:
            jobs.append((entry, _post_job(entry, output_dir, cfg)))

    def _record(entry: Entry) -> None:
        if entry.kind is Kind.COMMENT:
            stats.comments += 1
        elif entry.draft:
            stats.drafts += 1
        else:
            stats.posts += 1
        if on_written is not None:
            on_written()

    concurrency = max(1, int(cfg.render_concurrency))
    if concurrency == 1:
        for entry, job in jobs:
            job()
            _record(entry)
        return stats

    with ThreadPoolExecutor(max_workers=concurrency) as executor:
        future_map = {executor.submit(job): entry for entry, job in jobs}
        for future in as_completed(future_map):
            future.result()
            _record(future_map[future])
    return stats


def _post_job(entry: Entry, output_dir: Path, cfg: OutputConfig) -> Callable[[], Path]:
    return lambda: write_post(entry, output_dir, cfg.format, cfg.post_extension)


def _comment_job(entry: Entry, output_dir: Path, cfg: OutputConfig) -> Callable[[], Path]:
    return lambda: write_comment(
        entry, output_dir, cfg.format, cfg.comments_dir, cfg.comment_extension
    )


def run_pipeline(
    input_path: Path,
    output_dir: Path,
    cfg: AppConfig,
    show_progress: bool = True,
    console: Console | None = None,
) -> RunStats:
    """Run the complete conversion.

    Args:
        input_path: Path to the Blogger export XML file
        output_dir: Target content directory
        cfg: Application configuration
        show_progress: Whether to display a progress bar while writing
        console: Rich console for output (creates default if None)

    Returns:
        Counts of what was written and skipped

    Raises:
        ExportError: On any condition that aborts the run
    """
    validate_config(cfg)
    prepare_output_dir(output_dir, cfg.output.comments_dir)
    logger = setup_logging(cfg.logging, output_dir)
    log_event(
        logger,
        "conversion_start",
        input=str(input_path),
        output=str(output_dir),
        frontmatter=cfg.output.format,
    )

    try:
        data = input_path.read_bytes()
    except OSError as exc:
        raise FeedFormatError(f"Cannot read {input_path}: {exc}") from exc

    entries = parse_blogger_xml(data)
    try:
        stats = resolve_entries(entries, cfg.output.extra)
    except TreeIntegrityError as exc:
        log_event(
            logger,
            "tree_integrity_error",
            str(exc),
            level=logging.ERROR,
            entry_id=exc.entry_id,
            parent_id=exc.parent_id,
        )
        raise
    log_event(
        logger,
        "tree_resolved",
        entries=len(entries),
        orphans=stats.orphans,
        unreachable=stats.unreachable,
        ignored=stats.ignored,
    )

    total = sum(1 for entry in entries if entry.kind in (Kind.POST, Kind.COMMENT))
    if show_progress:
        with Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console or Console(),
            transient=True,
        ) as progress:
            task = progress.add_task("Writing files", total=total)
            render_entries(
                entries, output_dir, cfg.output, stats, lambda: progress.advance(task, 1)
            )
    else:
        render_entries(entries, output_dir, cfg.output, stats)

    logger.info("Wrote %d published posts to disk.", stats.posts)
    logger.info("Wrote %d drafts to disk.", stats.drafts)
    log_event(
        logger,
        "conversion_complete",
        posts=stats.posts,
        drafts=stats.drafts,
        comments=stats.comments,
        orphans=stats.orphans,
    )
    return stats
