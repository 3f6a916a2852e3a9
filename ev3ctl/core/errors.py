"""Domain-specific errors for ev3ctl."""

from __future__ import annotations

from collections.abc import Sequence


class Ev3ctlError(Exception):
    """Base error for ev3ctl."""


class ConfigError(Ev3ctlError):
    """Raised when the settings file cannot be read or is invalid."""


class ProfileValidationError(Ev3ctlError):
    """Raised when a profile file does not conform to schema or semantics."""


class ProfileLoadError(Ev3ctlError):
    """Raised when loading profile sources fails."""


class DeviceNotConnectedError(Ev3ctlError):
    """Raised when discovery finds no device for the requested drivers/port."""

    def __init__(self, device: Sequence[str], port: str | None = None) -> None:
        self.device = tuple(device)
        self.port = port
        where = f" on port '{port}'" if port is not None else ""
        super().__init__(f"No device with driver {list(self.device)} connected{where}")


class MultipleMatchesError(Ev3ctlError):
    """Raised when single-device discovery finds more than one candidate."""

    def __init__(self, device: Sequence[str], instances: Sequence[str]) -> None:
        self.device = tuple(device)
        self.instances = tuple(instances)
        super().__init__(
            f"Multiple devices with driver {list(self.device)} found: "
            f"{', '.join(self.instances)}. Select one by port."
        )


class AttributeIOError(Ev3ctlError):
    """Raised when listing, reading or writing the device tree fails."""

    def __init__(
        self,
        message: str,
        *,
        class_name: str | None = None,
        instance: str | None = None,
        attribute: str | None = None,
    ) -> None:
        self.class_name = class_name
        self.instance = instance
        self.attribute = attribute
        super().__init__(message)


class AttributeResolutionError(AttributeIOError):
    """Raised when an attribute path does not exist or is not accessible."""


class ParseError(Ev3ctlError):
    """Raised when a token does not match the expected grammar."""


class AttributeParseError(ParseError):
    """Raised when attribute content does not match the requested type."""


class UnsupportedFormatError(ParseError):
    """Raised on an unknown or unexpected binary data format."""
