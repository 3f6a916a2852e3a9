"""Profile loading and validation for YAML-based device profiles."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

from ev3ctl.core.config import config_dir, data_dir
from ev3ctl.core.documents import read_yaml, validate
from ev3ctl.core.errors import ProfileLoadError, ProfileValidationError
from ev3ctl.core.model import DeviceProfile

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedProfiles:
    profiles: dict[str, DeviceProfile]
    warnings: tuple[str, ...]


def _profile_dirs() -> tuple[Path, Path]:
    return config_dir() / "profiles", data_dir() / "profiles"


def _build_profile(doc: dict[str, Any], source: Path | Traversable) -> DeviceProfile:
    validate(doc, "profile.schema.json", source, invalid_error=ProfileValidationError)

    driver_names = tuple(name.strip() for name in doc["driver_names"])
    if len(set(driver_names)) != len(driver_names):
        raise ProfileValidationError(f"{doc['id']}.driver_names contains duplicates in {source}")

    modes = tuple(doc.get("modes", []))
    if len(set(modes)) != len(modes):
        raise ProfileValidationError(f"{doc['id']}.modes contains duplicates in {source}")

    return DeviceProfile(
        id=doc["id"],
        name=doc["name"],
        class_name=doc["class_name"],
        driver_names=driver_names,
        port=doc.get("port", "none"),
        modes=modes,
    )


def _load_file(path: Path | Traversable) -> DeviceProfile:
    doc = read_yaml(path, read_error=ProfileLoadError, invalid_error=ProfileValidationError)
    return _build_profile(doc, path)


def _iter_packaged_profile_paths() -> list[Traversable]:
    profile_root = resources.files("ev3ctl.profiles")
    return [item for item in profile_root.iterdir() if item.name.endswith((".yml", ".yaml"))]


def _iter_user_profile_paths() -> list[Path]:
    paths: list[Path] = []
    for directory in _profile_dirs():
        if not directory.exists() or not directory.is_dir():
            continue
        paths.extend(sorted(p for p in directory.iterdir() if p.suffix in {".yml", ".yaml"}))
    return paths


def load_profiles() -> LoadedProfiles:
    profiles: dict[str, DeviceProfile] = {}
    warnings: list[str] = []

    for path in sorted(_iter_packaged_profile_paths(), key=lambda p: p.name):
        profile = _load_file(path)
        profiles[profile.id] = profile

    for path in _iter_user_profile_paths():
        profile = _load_file(path)
        if profile.id in profiles:
            warning = f"User profile '{profile.id}' overrides packaged profile"
            LOGGER.warning(warning)
            warnings.append(warning)
        profiles[profile.id] = profile

    return LoadedProfiles(profiles=profiles, warnings=tuple(warnings))
