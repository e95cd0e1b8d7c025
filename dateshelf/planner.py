"""Plan where each entry of a directory should move.

The plan for a directory is a list of :class:`MovePlan` sorted by
destination. Files go to ``YYYY/MM/<category>/<name>`` and subdirectories
to ``YYYY/MM/<name>``, with year and month taken from the entry's
added-date. Nothing here touches the filesystem beyond one listing of the
base directory and the date lookups.
"""
import logging
import os
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .categories import classify, extension_of
from .errors import ListingError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    """One item of a non-recursive directory listing."""

    name: str
    is_directory: bool

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(".")

    @property
    def is_year_bucket(self) -> bool:
        # a YYYY folder left behind by an earlier run
        return len(self.name) == 4 and self.name.startswith("20")


@dataclass(frozen=True)
class MovePlan:
    """Move ``source`` to ``destination`` (relative to the base directory)."""

    source: Path
    destination: str
    is_directory: bool = False

    def target(self, base_dir: Path) -> Path:
        return Path(base_dir) / self.destination


def plan_file(name: str, added: datetime, category: str) -> str:
    """Return the relative destination ``YYYY/MM/category/name`` for a file."""
    return f"{added.year:d}/{added.month:02d}/{category}/{name}"


def plan_directory(name: str, added: datetime) -> str:
    """Return the relative destination ``YYYY/MM/name`` for a directory."""
    return f"{added.year:d}/{added.month:02d}/{name}"


def list_entries(base_dir: Path) -> List[Entry]:
    """List ``base_dir`` once, without recursing.

    Symlinks are never directories here, even when they point to one, so
    they are filed like any other file.

    Raises :class:`ListingError` when the directory cannot be read.
    """
    try:
        with os.scandir(base_dir) as it:
            return [Entry(e.name, e.is_dir(follow_symlinks=False)) for e in it]
    except OSError as e:
        raise ListingError(f"cannot list {str(base_dir)!r}: {e.strerror or e}") from e


def build_batch(
    base_dir: Path,
    date_func: Callable[[Path], datetime],
    exclude_dirs: bool = False,
    logger: Optional[logging.Logger] = None,
) -> List[MovePlan]:
    """Build the sorted batch of moves for ``base_dir``.

    Args:
        base_dir: Directory to reorganize. Sources in the returned plans are
            absolute paths inside it.
        date_func: Called with each candidate's path; returns its added-date.
            Any :class:`AddedDateError` it raises aborts the whole batch.
        exclude_dirs: When True, only files are planned.
        logger: Where to send diagnostics; defaults to this module's logger.

    Returns:
        Plans for files and subdirectories, stably sorted by destination.
    """
    logger = logger or log
    base_dir = Path(base_dir).absolute()
    entries = list_entries(base_dir)
    logger.debug("listed %d entries in %s", len(entries), base_dir)

    plans: List[MovePlan] = []
    for entry in entries:
        if entry.is_directory or entry.is_hidden:
            continue
        src = base_dir / entry.name
        added = date_func(src)
        category = classify(extension_of(entry.name))
        plans.append(MovePlan(src, plan_file(entry.name, added, category)))
        logger.debug("file %s added %s -> %s", entry.name, added, plans[-1].destination)

    if exclude_dirs:
        logger.debug("skipping directories")
    else:
        for entry in entries:
            if not entry.is_directory or entry.is_hidden or entry.is_year_bucket:
                continue
            src = base_dir / entry.name
            added = date_func(src)
            plans.append(MovePlan(src, plan_directory(entry.name, added), is_directory=True))
            logger.debug("dir %s added %s -> %s", entry.name, added, plans[-1].destination)

    # byte order, so undecodable (surrogate-escaped) names sort as on disk
    plans.sort(key=lambda p: os.fsencode(p.destination))
    return plans


def find_collisions(plans: List[MovePlan]) -> Dict[str, List[Path]]:
    """Return destinations that more than one plan would move onto."""
    by_dest: Dict[str, List[Path]] = defaultdict(list)
    for plan in plans:
        by_dest[plan.destination].append(plan.source)
    return {dest: srcs for dest, srcs in by_dest.items() if len(srcs) > 1}
