from __future__ import annotations

from pathlib import Path

import pytest


def make_device(root: Path, class_name: str, instance: str, **attributes: str | int | bytes) -> Path:
    """Create ``root/class_name/instance`` with one file per attribute."""
    device_dir = root / class_name / instance
    device_dir.mkdir(parents=True, exist_ok=True)
    for name, value in attributes.items():
        path = device_dir / name
        if isinstance(value, bytes):
            path.write_bytes(value)
        else:
            path.write_text(f"{value}\n", encoding="utf-8")
    return device_dir


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("EV3CTL_DRIVER_PATH", raising=False)


@pytest.fixture
def device_root(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    root = tmp_path / "sys" / "class"
    root.mkdir(parents=True)
    monkeypatch.setenv("EV3CTL_DRIVER_PATH", str(root))
    return root
