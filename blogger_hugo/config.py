"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- OutputConfig: Frontmatter format, file naming and render workers
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


@dataclass
class OutputConfig:
    """Configuration for output generation.

    Attributes:
        format: Frontmatter format, "toml" or "yaml"
        comments_dir: Subdirectory of the target directory for comment files
        post_extension: File extension for posts
        comment_extension: File extension for comments
        render_concurrency: Number of parallel workers writing files
        extra: Text appended verbatim to every frontmatter block
    """

    format: str = "toml"
    comments_dir: str = "comments"
    post_extension: str = ".md"
    comment_extension: str = ".toml"
    render_concurrency: int = 1
    extra: str | None = None


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to a file in the target directory
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "convert.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


DEFAULT_CONFIG = AppConfig()


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return _fromdict(_asdict(DEFAULT_CONFIG))

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(DEFAULT_CONFIG, raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update({k: v for k, v in value.items() if k in data[key]})
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "output": {
            "format": cfg.output.format,
            "comments_dir": cfg.output.comments_dir,
            "post_extension": cfg.output.post_extension,
            "comment_extension": cfg.output.comment_extension,
            "render_concurrency": cfg.output.render_concurrency,
            "extra": cfg.output.extra,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
    )
