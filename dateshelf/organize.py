"""Organize a directory into year/month folders based on added-dates.

:func:`organize` is the entry point used by the CLI: it builds the batch
with :mod:`dateshelf.planner` and then either prints it as CSV (dry run)
or applies it with :func:`apply_plans`.
"""
import csv
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from tqdm import tqdm

from .added_date import AddedDateFunc, get_date_func
from .config import Config
from .errors import ApplyError, CollisionError, ReportWriteError
from .planner import MovePlan, build_batch, find_collisions

log = logging.getLogger(__name__)

# owner rwx, group/other read
DIR_MODE = 0o744


def write_report(plans: List[MovePlan], base_dir: Path, out: Optional[TextIO] = None):
    """Write ``plans`` as ``old,new`` CSV rows of absolute paths.

    Raises :class:`ReportWriteError` if the output cannot be written, for
    example when stdout is a closed pipe.
    """
    out = out if out is not None else sys.stdout
    base_dir = Path(base_dir).absolute()
    try:
        w = csv.writer(out, lineterminator="\n")
        w.writerow(["old", "new"])
        for p in plans:
            w.writerow([str(p.source), str(p.target(base_dir))])
        out.flush()
    except OSError as e:
        raise ReportWriteError(f"writing report: {e}") from e


def apply_plans(
    plans: List[MovePlan],
    base_dir: Path,
    progress: bool = False,
    logger: Optional[logging.Logger] = None,
) -> List[MovePlan]:
    """Rename every source to its destination, in order.

    Missing destination folders are created first. The first failure
    raises :class:`ApplyError`; moves already made are left where they
    are and the remaining plans are not attempted.

    Returns:
        The plans that were applied.
    """
    logger = logger or log
    base_dir = Path(base_dir).absolute()

    collisions = find_collisions(plans)
    if collisions:
        for dest, srcs in collisions.items():
            logger.error("%s claimed by %s", dest, ", ".join(s.name for s in srcs))
        raise CollisionError(collisions)

    done: List[MovePlan] = []
    for p in tqdm(plans, desc="moving", unit="entry", disable=not progress):
        dst = p.target(base_dir)
        try:
            dst.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise ApplyError(f"creating {str(dst.parent)!r}: {e.strerror or e}") from e
        try:
            os.rename(p.source, dst)
        except OSError as e:
            raise ApplyError(
                f"moving {str(p.source)!r} to {str(dst)!r}: {e.strerror or e} "
                f"({len(done)} of {len(plans)} moves applied)"
            ) from e
        logger.debug("moved %s -> %s", p.source, dst)
        done.append(p)
    return done


def organize(
    config: Config,
    date_func: Optional[AddedDateFunc] = None,
    out: Optional[TextIO] = None,
    logger: Optional[logging.Logger] = None,
) -> List[MovePlan]:
    """Plan and then report or apply the reorganization of ``config.dir``.

    Args:
        config: Resolved options.
        date_func: Added-date lookup; defaults to the one named by
            ``config.date_source``. Tests inject their own for deterministic
            dates.
        out: Stream for the dry-run report (stdout by default).
        logger: Diagnostics sink shared by the planner and the executor.

    Returns:
        The sorted batch, whether or not it was applied.
    """
    logger = logger or log
    base_dir = Path(config.dir).expanduser().absolute()
    if date_func is None:
        date_func = get_date_func(config.date_source)
    logger.debug("using %s for added dates", getattr(date_func, "__name__", date_func))

    plans = build_batch(base_dir, date_func, exclude_dirs=config.exclude_dirs, logger=logger)
    logger.info("planned %d move(s) in %s", len(plans), base_dir)

    if config.dry_run:
        for dest, srcs in find_collisions(plans).items():
            logger.warning("%s claimed by %s", dest, ", ".join(s.name for s in srcs))
        write_report(plans, base_dir, out)
        return plans

    apply_plans(plans, base_dir, progress=config.progress, logger=logger)
    logger.info("moved %d entries", len(plans))
    return plans
