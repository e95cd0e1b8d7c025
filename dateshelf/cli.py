"""Command-line interface for the ``dateshelf`` package.

This module exposes the CLI entrypoint used by the console script
``dateshelf``. It is a thin adapter from parsed arguments to
:func:`dateshelf.organize.organize`; tests call :func:`main` with an
argument list instead of spawning a subprocess.
"""
import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import List, Optional

from . import organize as organize_mod
from .added_date import DATE_SOURCES
from .config import resolve_config
from .errors import DateshelfError

try:
    __version__ = version("dateshelf")
except PackageNotFoundError:
    __version__ = "0+unknown"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Every option defaults to ``None`` so :func:`dateshelf.config.resolve_config`
    can fall back to ``DATESHELF_*`` environment variables for flags that
    were not given.
    """
    parser = argparse.ArgumentParser(
        prog="dateshelf",
        description="Shelve files into YEAR/MM/kind folders by the date they were added.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Files move to YEAR/MM/<kind>/<name>, where kind is one of
archive, audio, data, doc, book, image, video, web or misc.
Folders move to YEAR/MM/<name>; folders named like a year (20xx) stay put.
Hidden entries are never moved.

Every option can also be set with an environment variable, e.g.
DATESHELF_DIR=~/Downloads or DATESHELF_DRY_RUN=1.
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=__version__,
    )
    # each long option is also accepted with a single dash, e.g. -dry-run
    parser.add_argument(
        "-dir", "--dir",
        default=None,
        help="Directory to organize (default: current directory)",
    )
    parser.add_argument(
        "-dry-run", "--dry-run",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print old,new CSV rows for every planned move instead of moving",
    )
    parser.add_argument(
        "-exclude-dirs", "--exclude-dirs",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Don't move directories, only files",
    )
    parser.add_argument(
        "-verbose", "--verbose",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Log debug output to stderr",
    )
    parser.add_argument(
        "-progress", "--progress",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show a progress bar while moving",
    )
    parser.add_argument(
        "-date-source", "--date-source",
        choices=DATE_SOURCES,
        default=None,
        help=(
            "Where the added date comes from: 'added' reads Spotlight's date added via mdls (macOS), "
            "'birth' uses the file creation time, 'modified' the modification time. "
            "'auto' (default) picks the first one this system supports."
        ),
    )
    return parser


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Send the package's log records to stderr.

    Nothing is logged unless ``verbose`` is set; errors still reach the
    user through the ``Error:`` line printed by :func:`main`.
    """
    logger = logging.getLogger("dateshelf")
    for h in list(logger.handlers):
        if not isinstance(h, logging.NullHandler):
            logger.removeHandler(h)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("dateshelf %(asctime)s %(message)s", "%Y/%m/%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.CRITICAL + 1)
    return logger


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = resolve_config(args)
        logger = setup_logging(config.verbose)
        organize_mod.organize(config, logger=logger)
    except (DateshelfError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
