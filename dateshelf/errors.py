"""Exceptions raised by dateshelf.

Every failure the command line reports is a :class:`DateshelfError`; the
underlying ``OSError`` (when there is one) is kept as ``__cause__``.
"""
from pathlib import Path


class DateshelfError(Exception):
    """Base error for the project."""


class ConfigError(DateshelfError):
    """Bad command-line or environment configuration."""


class ListingError(DateshelfError):
    """The target directory could not be listed."""


class AddedDateError(DateshelfError):
    """No added-date could be determined for an entry."""

    def __init__(self, path, reason: str = "date added unavailable"):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"could not read {str(self.path)!r}: {reason}")


class ApplyError(DateshelfError):
    """A directory creation or rename failed while applying a batch."""


class CollisionError(ApplyError):
    """Two or more sources would be moved to the same destination."""

    def __init__(self, collisions):
        self.collisions = collisions
        first = next(iter(collisions))
        super().__init__(
            f"{len(collisions)} destination(s) claimed by more than one entry, "
            f"e.g. {first!r}"
        )


class ReportWriteError(DateshelfError):
    """The dry-run report could not be written."""
