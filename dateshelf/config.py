"""
Configuration for dateshelf.

Options come from command-line flags, then ``DATESHELF_*`` environment
variables, then the defaults below, and are resolved once at startup into
an immutable :class:`Config`.
"""

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from .errors import ConfigError

ENV_PREFIX = "DATESHELF"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Config:
    """
    Options for one run.

    Example:
        # Preview what would happen to ~/Downloads
        config = Config(dir="~/Downloads", dry_run=True)
    """

    dir: str = "."
    dry_run: bool = False
    exclude_dirs: bool = False
    verbose: bool = False
    progress: bool = False
    date_source: str = "auto"


DEFAULT_CONFIG = Config()


def env_name(option: str) -> str:
    """Return the environment variable for an option, e.g. ``DATESHELF_DRY_RUN``."""
    return f"{ENV_PREFIX}_{option.upper().replace('-', '_')}"


def parse_bool(name: str, value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ConfigError(f"invalid boolean value {value!r} for {name}")


def resolve_config(args=None, environ: Optional[Mapping[str, str]] = None) -> Config:
    """Build a :class:`Config` from parsed flags and the environment.

    Args:
        args: argparse Namespace (or any object) whose attributes are named
            after the Config fields. An attribute that is missing or ``None``
            means the flag was not given.
        environ: Environment mapping; defaults to ``os.environ``.

    Raises:
        ConfigError: an environment variable holds an unusable value.
    """
    environ = os.environ if environ is None else environ
    values = {}
    for f in fields(Config):
        explicit = getattr(args, f.name, None) if args is not None else None
        if explicit is not None:
            values[f.name] = explicit
            continue
        name = env_name(f.name)
        if name not in environ:
            continue
        raw = environ[name]
        if f.type is bool:
            values[f.name] = parse_bool(name, raw)
        else:
            values[f.name] = raw
    return Config(**values)
