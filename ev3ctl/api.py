"""Stable public API for building tooling on top of ev3ctl.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

import os

from ev3ctl.core.attribute import Attribute, decode_bin_data
from ev3ctl.core.discovery import (
    find_all_instances_by_driver,
    find_instance_by_driver,
    find_instance_by_port_and_driver,
)
from ev3ctl.core.driver import Driver
from ev3ctl.core.errors import (
    AttributeIOError,
    AttributeParseError,
    AttributeResolutionError,
    ConfigError,
    DeviceNotConnectedError,
    Ev3ctlError,
    MultipleMatchesError,
    ParseError,
    ProfileLoadError,
    ProfileValidationError,
    UnsupportedFormatError,
)
from ev3ctl.core.model import BinData, BinDataFormat, DetectedDevice, DeviceProfile, ResolvedDevice
from ev3ctl.core.ports import MotorPort, Port, SensorPort, parse_port
from ev3ctl.core.service import DeviceService

__all__ = [
    "Ev3ctlError",
    "ConfigError",
    "ProfileLoadError",
    "ProfileValidationError",
    "DeviceNotConnectedError",
    "MultipleMatchesError",
    "AttributeIOError",
    "AttributeResolutionError",
    "ParseError",
    "AttributeParseError",
    "UnsupportedFormatError",
    "Attribute",
    "Driver",
    "BinData",
    "BinDataFormat",
    "DetectedDevice",
    "DeviceProfile",
    "ResolvedDevice",
    "Port",
    "SensorPort",
    "MotorPort",
    "parse_port",
    "decode_bin_data",
    "find_instance_by_port_and_driver",
    "find_instance_by_driver",
    "find_all_instances_by_driver",
    "Client",
]


class Client:
    """Public client for interacting with ev3ctl core capabilities.

    A `Client` wraps profile loading, device discovery and the per-device
    attribute caches behind a stable API intended for third-party tools
    (GUI/TUI/services/scripts).
    """

    def __init__(self, *, driver_path: str | os.PathLike[str] | None = None) -> None:
        self._service = DeviceService(driver_path=driver_path)

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return self._service.load_warnings

    @property
    def runtime_warnings(self) -> tuple[str, ...]:
        return self._service.runtime_warnings

    def list_profiles(self) -> list[DeviceProfile]:
        return self._service.list_profiles()

    def list_devices(self, class_name: str) -> list[DetectedDevice]:
        return self._service.list_devices(class_name)

    def resolve(self, profile_id: str, *, port: str | None = None) -> ResolvedDevice:
        return self._service.resolve(profile_id, port=port)

    def open(self, profile_id: str, *, port: str | None = None) -> Driver:
        """Resolve ``profile_id`` and return the driver for the matched device."""
        resolved = self._service.resolve(profile_id, port=port)
        return self._service.driver(resolved.profile.class_name, resolved.instance)

    def driver(self, class_name: str, instance: str) -> Driver:
        return self._service.driver(class_name, instance)

    def read_attribute(self, class_name: str, instance: str, attribute: str) -> str:
        return self._service.read_attribute(class_name, instance, attribute)

    def write_attribute(self, class_name: str, instance: str, attribute: str, value: str) -> None:
        self._service.write_attribute(class_name, instance, attribute, value)

    def read_bin_data(self, class_name: str, instance: str) -> BinData:
        return self._service.read_bin_data(class_name, instance)
