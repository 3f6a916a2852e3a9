from __future__ import annotations

from pathlib import Path

import pytest

from ev3ctl.core import config as config_module
from ev3ctl.core.config import DEFAULT_DRIVER_PATH, load_settings, resolve_driver_path
from ev3ctl.core.errors import ConfigError


def _write_settings(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "cfg" / "ev3ctl" / "config.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_defaults_without_settings_file() -> None:
    assert load_settings().driver_path == DEFAULT_DRIVER_PATH
    assert resolve_driver_path() == Path(DEFAULT_DRIVER_PATH)


def test_settings_file_sets_driver_path(tmp_path: Path) -> None:
    path = _write_settings(tmp_path, "driver_path: /srv/fake-sys/class\n")

    settings = load_settings()

    assert settings.driver_path == "/srv/fake-sys/class"
    assert settings.source == path
    assert resolve_driver_path() == Path("/srv/fake-sys/class")


def test_environment_beats_settings_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _write_settings(tmp_path, "driver_path: /srv/from-file\n")
    monkeypatch.setenv("EV3CTL_DRIVER_PATH", "/srv/from-env")

    assert resolve_driver_path() == Path("/srv/from-env")
    assert resolve_driver_path("/srv/explicit") == Path("/srv/explicit")


def test_unknown_settings_key_rejected(tmp_path: Path) -> None:
    _write_settings(tmp_path, "driver_path: /sys/class/\nport_timeout: 3\n")

    with pytest.raises(ConfigError):
        load_settings()


def test_duplicate_settings_key_rejected(tmp_path: Path) -> None:
    _write_settings(tmp_path, "driver_path: /a\ndriver_path: /b\n")

    with pytest.raises(ConfigError):
        load_settings()


def test_settings_file_parsed_once_until_it_changes(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = _write_settings(tmp_path, "driver_path: /srv/a\n")
    reads: list[Path] = []
    original = config_module.read_yaml

    def counting(source, **kwargs):
        reads.append(source)
        return original(source, **kwargs)

    monkeypatch.setattr(config_module, "read_yaml", counting)

    for _ in range(3):
        assert resolve_driver_path() == Path("/srv/a")
    assert reads == [path]

    _write_settings(tmp_path, "driver_path: /srv/changed\n")

    assert resolve_driver_path() == Path("/srv/changed")
    assert reads == [path, path]
