"""Service layer used by CLI and future UI frontends."""

from __future__ import annotations

import os
import threading
from pathlib import Path

from ev3ctl.core.attribute import decode_bin_data
from ev3ctl.core.config import resolve_driver_path
from ev3ctl.core.discovery import (
    find_all_instances_by_driver,
    find_instance_by_driver,
    find_instance_by_port_and_driver,
)
from ev3ctl.core.driver import Driver
from ev3ctl.core.errors import AttributeIOError, AttributeResolutionError, ProfileLoadError
from ev3ctl.core.model import BinData, BinDataFormat, DetectedDevice, DeviceProfile, ResolvedDevice
from ev3ctl.core.ports import parse_port
from ev3ctl.core.profile_loader import load_profiles


class DeviceService:
    def __init__(self, *, driver_path: str | os.PathLike[str] | None = None) -> None:
        loaded = load_profiles()
        self.profiles = loaded.profiles
        self.load_warnings = loaded.warnings
        self.driver_path: Path = resolve_driver_path(driver_path)
        self.runtime_warnings = _runtime_warnings(self.driver_path)
        self._drivers: dict[tuple[str, str], Driver] = {}
        self._drivers_lock = threading.Lock()

    def list_profiles(self) -> list[DeviceProfile]:
        return sorted(self.profiles.values(), key=lambda p: p.id)

    def profile(self, profile_id: str) -> DeviceProfile:
        profile = self.profiles.get(profile_id)
        if profile is None:
            raise ProfileLoadError(
                f"Unknown profile '{profile_id}'. Use 'ev3ctl profiles' to inspect available profiles."
            )
        return profile

    def list_classes(self) -> list[str]:
        try:
            return sorted(entry.name for entry in self.driver_path.iterdir() if entry.is_dir())
        except OSError as exc:
            raise AttributeIOError(f"Could not list {self.driver_path}: {exc}") from exc

    def list_devices(self, class_name: str) -> list[DetectedDevice]:
        """Every instance of ``class_name`` with its driver name and address."""
        class_dir = self.driver_path / class_name
        try:
            names = sorted(entry.name for entry in class_dir.iterdir())
        except OSError as exc:
            raise AttributeIOError(
                f"Could not list device class {class_dir}: {exc}", class_name=class_name
            ) from exc

        devices: list[DetectedDevice] = []
        for name in names:
            driver = self.driver(class_name, name)
            try:
                address: str | None = driver.get_attribute("address").get()
            except AttributeResolutionError:
                address = None
            devices.append(
                DetectedDevice(
                    class_name=class_name,
                    instance=name,
                    driver_name=driver.get_attribute("driver_name").get(),
                    address=address,
                )
            )
        return devices

    def driver(self, class_name: str, instance: str) -> Driver:
        """Shared ``Driver`` for ``(class_name, instance)``; one attribute cache per device."""
        key = (class_name, instance)
        with self._drivers_lock:
            driver = self._drivers.get(key)
            if driver is None:
                driver = Driver(class_name, instance, driver_path=self.driver_path)
                self._drivers[key] = driver
        return driver.clone()

    def resolve(self, profile_id: str, port: str | None = None) -> ResolvedDevice:
        profile = self.profile(profile_id)
        if port is not None:
            kind = profile.port if profile.port != "none" else None
            instance = find_instance_by_port_and_driver(
                profile.class_name,
                parse_port(port, kind),
                profile.driver_names,
                driver_path=self.driver_path,
            )
        else:
            instance = find_instance_by_driver(
                profile.class_name,
                profile.driver_names,
                driver_path=self.driver_path,
            )
        return ResolvedDevice(profile=profile, instance=instance)

    def find_all(self, profile_id: str) -> list[ResolvedDevice]:
        profile = self.profile(profile_id)
        return [
            ResolvedDevice(profile=profile, instance=instance)
            for instance in find_all_instances_by_driver(
                profile.class_name,
                profile.driver_names,
                driver_path=self.driver_path,
            )
        ]

    def read_attribute(self, class_name: str, instance: str, attribute: str) -> str:
        return self.driver(class_name, instance).get_attribute(attribute).get()

    def read_attribute_list(self, class_name: str, instance: str, attribute: str) -> list[str]:
        return self.driver(class_name, instance).get_attribute(attribute).get_vec()

    def write_attribute(self, class_name: str, instance: str, attribute: str, value: str) -> None:
        self.driver(class_name, instance).get_attribute(attribute).set_str(value)

    def read_bin_data(self, class_name: str, instance: str) -> BinData:
        """Decode ``bin_data`` using the device's ``bin_data_format`` and ``num_values``."""
        driver = self.driver(class_name, instance)
        fmt = BinDataFormat.parse(driver.get_attribute("bin_data_format").get())
        count = driver.get_attribute("num_values").get(int)
        raw = driver.get_attribute("bin_data").get_raw_data()
        return BinData(format=fmt, values=decode_bin_data(raw, fmt, count))


def _runtime_warnings(driver_path: Path) -> tuple[str, ...]:
    warnings: list[str] = []
    if not driver_path.is_dir():
        warnings.append(f"Device tree root {driver_path} does not exist; no devices will be found.")
    return tuple(warnings)
