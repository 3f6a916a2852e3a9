"""Settings and device-tree root resolution."""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from ev3ctl.core.documents import read_yaml, validate
from ev3ctl.core.errors import ConfigError

DEFAULT_DRIVER_PATH = "/sys/class/"
DRIVER_PATH_ENV = "EV3CTL_DRIVER_PATH"
LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    driver_path: str = DEFAULT_DRIVER_PATH
    source: Path | None = None


def config_dir() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "ev3ctl"


def data_dir() -> Path:
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local/share")) / "ev3ctl"


def settings_path() -> Path:
    return config_dir() / "config.yaml"


def load_settings(path: Path | None = None) -> Settings:
    """Load ``config.yaml``; a missing file yields the defaults.

    The parsed file is cached until its modification time or size changes.
    """
    path = path or settings_path()
    try:
        info = path.stat()
    except FileNotFoundError:
        return Settings()
    except OSError as exc:
        raise ConfigError(f"Could not read {path}: {exc}") from exc
    if not stat.S_ISREG(info.st_mode):
        return Settings()
    return _parse_settings(path, info.st_mtime_ns, info.st_size)


@lru_cache(maxsize=8)
def _parse_settings(path: Path, mtime_ns: int, size: int) -> Settings:
    doc = read_yaml(path, read_error=ConfigError, invalid_error=ConfigError)
    validate(doc, "settings.schema.json", path, invalid_error=ConfigError)
    LOGGER.debug("Loaded settings from %s", path)
    return Settings(driver_path=doc.get("driver_path", DEFAULT_DRIVER_PATH), source=path)


def resolve_driver_path(driver_path: str | os.PathLike[str] | None = None) -> Path:
    """Return the device-tree root.

    Precedence: explicit argument, ``EV3CTL_DRIVER_PATH``, ``config.yaml``,
    then ``/sys/class/``.
    """
    if driver_path is not None:
        return Path(driver_path)
    from_env = os.environ.get(DRIVER_PATH_ENV)
    if from_env:
        return Path(from_env)
    return Path(load_settings().driver_path)
