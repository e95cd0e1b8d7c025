from dataclasses import FrozenInstanceError
from types import SimpleNamespace

import pytest

from dateshelf.config import DEFAULT_CONFIG, Config, env_name, resolve_config
from dateshelf.errors import ConfigError


def _args(**kw):
    base = dict(dir=None, dry_run=None, exclude_dirs=None, verbose=None, progress=None, date_source=None)
    base.update(kw)
    return SimpleNamespace(**base)


def test_defaults():
    assert resolve_config(_args(), environ={}) == DEFAULT_CONFIG == Config()
    assert DEFAULT_CONFIG.dir == "."
    assert DEFAULT_CONFIG.dry_run is False


def test_env_name():
    assert env_name("dry_run") == "DATESHELF_DRY_RUN"
    assert env_name("exclude-dirs") == "DATESHELF_EXCLUDE_DIRS"


def test_environment_used_when_flag_missing():
    env = {
        "DATESHELF_DIR": "/data/inbox",
        "DATESHELF_DRY_RUN": "true",
        "DATESHELF_EXCLUDE_DIRS": "1",
        "DATESHELF_VERBOSE": "off",
        "DATESHELF_DATE_SOURCE": "modified",
    }
    config = resolve_config(_args(), environ=env)
    assert config == Config(dir="/data/inbox", dry_run=True, exclude_dirs=True, verbose=False, date_source="modified")


def test_flag_beats_environment():
    env = {"DATESHELF_DIR": "/from/env", "DATESHELF_DRY_RUN": "no"}
    config = resolve_config(_args(dir="/from/flag", dry_run=True), environ=env)
    assert config.dir == "/from/flag"
    assert config.dry_run is True


def test_none_args_reads_environment_only():
    assert resolve_config(None, environ={"DATESHELF_PROGRESS": "YES"}).progress is True


@pytest.mark.parametrize("value", ["maybe", "2", "y e s"])
def test_bad_boolean(value):
    with pytest.raises(ConfigError, match="DATESHELF_DRY_RUN"):
        resolve_config(_args(), environ={"DATESHELF_DRY_RUN": value})


def test_config_is_frozen():
    with pytest.raises(FrozenInstanceError):
        DEFAULT_CONFIG.dry_run = True
