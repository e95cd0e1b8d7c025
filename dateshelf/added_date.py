"""Look up when a file or directory was added to its parent directory.

macOS records this in Spotlight metadata as ``kMDItemDateAdded``; this
module reads it through the ``mdls`` command-line tool. Other platforms have
no such attribute, so the birth time or the modification time can stand in
for it (see :func:`get_date_func`).

Every lookup function takes a path and returns a naive local-time
:class:`datetime.datetime`, or raises :class:`AddedDateError`.
"""
import shutil
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict

from .errors import AddedDateError, ConfigError
from .utils import parse_date, to_local

AddedDateFunc = Callable[[Path], datetime]

DATE_SOURCES = ("auto", "added", "birth", "modified")


def has_mdls():
    """Return ``True`` when the ``mdls`` binary is found on PATH."""
    return shutil.which("mdls") is not None


def has_birthtime(path: Path = Path(".")):
    """Return ``True`` when the platform reports ``st_birthtime``."""
    return getattr(path.stat(), "st_birthtime", None) is not None


def date_added(path: Path) -> datetime:
    """Return the Spotlight ``kMDItemDateAdded`` value for ``path``.

    Runs ``mdls -raw -name kMDItemDateAdded`` and parses its output.
    Raises :class:`AddedDateError` if mdls is missing, fails, or prints
    ``(null)`` (the volume is not indexed or does not track the attribute).
    """
    if not has_mdls():
        raise AddedDateError(path, "mdls not found on PATH")
    try:
        r = subprocess.run(
            ["mdls", "-raw", "-name", "kMDItemDateAdded", str(path)],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        reason = (e.stderr or "").strip() or f"mdls exited with status {e.returncode}"
        raise AddedDateError(path, reason) from e
    except OSError as e:
        raise AddedDateError(path, str(e)) from e

    dt = parse_date(r.stdout)
    if dt is None:
        raise AddedDateError(path, f"no date added in mdls output {r.stdout.strip()!r}")
    return to_local(dt)


def date_born(path: Path) -> datetime:
    """Return the filesystem birth (creation) time of ``path``.

    Symlinks are not followed; the link itself is what gets moved.
    """
    try:
        st = path.lstat()
    except OSError as e:
        raise AddedDateError(path, str(e)) from e
    ts = getattr(st, "st_birthtime", None)
    if ts is None:
        raise AddedDateError(path, "birth time not supported on this platform")
    return datetime.fromtimestamp(ts)


def date_modified(path: Path) -> datetime:
    """Return the modification time of ``path`` (not of a symlink's target)."""
    try:
        return datetime.fromtimestamp(path.lstat().st_mtime)
    except OSError as e:
        raise AddedDateError(path, str(e)) from e


_SOURCES: Dict[str, AddedDateFunc] = {
    "added": date_added,
    "birth": date_born,
    "modified": date_modified,
}


def get_date_func(source: str = "auto") -> AddedDateFunc:
    """Return the lookup function for a ``--date-source`` name.

    ``auto`` prefers the real added-date via mdls, then the birth time,
    then the modification time, depending on what this machine supports.
    """
    if source == "auto":
        if has_mdls():
            return date_added
        if has_birthtime():
            return date_born
        return date_modified
    try:
        return _SOURCES[source]
    except KeyError:
        raise ConfigError(
            f"unknown date source {source!r} (choose from {', '.join(DATE_SOURCES)})"
        ) from None
