"""Fatal error types. Anything raised from here aborts the whole run."""

from __future__ import annotations


class ExportError(Exception):
    """Base class for errors that stop a conversion run."""


class FeedFormatError(ExportError, ValueError):
    """The input document or one of its fields could not be read."""


class TreeIntegrityError(ExportError, RuntimeError):
    """A comment names a parent identifier that was never seen in the feed."""

    def __init__(self, entry_index: int, entry_id: str, parent_id: int):
        super().__init__(
            f"entry {entry_index} ({entry_id}) replies to {parent_id}, "
            "which does not exist in the feed"
        )
        self.entry_index = entry_index
        self.entry_id = entry_id
        self.parent_id = parent_id


class OutputError(ExportError):
    """The output directory or one of its files could not be written."""


class ConfigError(ExportError, ValueError):
    """A configuration value is not supported."""
