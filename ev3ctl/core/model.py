"""Core data models used across loader, discovery, service, and CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ev3ctl.core.errors import UnsupportedFormatError


class BinDataFormat(Enum):
    """Layout of the values in a ``bin_data`` attribute."""

    U8 = "u8"
    S8 = "s8"
    U16 = "u16"
    S16 = "s16"
    S16_BE = "s16_be"
    S32 = "s32"
    S32_BE = "s32_be"
    FLOAT = "float"

    @property
    def size(self) -> int:
        """Width of a single value in bytes."""
        return _FORMAT_LAYOUT[self][0]

    @property
    def struct_code(self) -> str:
        return _FORMAT_LAYOUT[self][1]

    @classmethod
    def parse(cls, token: str) -> BinDataFormat:
        try:
            return cls(token.strip())
        except ValueError:
            raise UnsupportedFormatError(f"Unknown bin_data_format '{token.strip()}'") from None


_FORMAT_LAYOUT: dict[BinDataFormat, tuple[int, str]] = {
    BinDataFormat.U8: (1, "<B"),
    BinDataFormat.S8: (1, "<b"),
    BinDataFormat.U16: (2, "<H"),
    BinDataFormat.S16: (2, "<h"),
    BinDataFormat.S16_BE: (2, ">h"),
    BinDataFormat.S32: (4, "<i"),
    BinDataFormat.S32_BE: (4, ">i"),
    BinDataFormat.FLOAT: (4, "<f"),
}


@dataclass(frozen=True)
class DeviceProfile:
    id: str
    name: str
    class_name: str
    driver_names: tuple[str, ...]
    port: str
    modes: tuple[str, ...] = ()


@dataclass(frozen=True)
class DetectedDevice:
    class_name: str
    instance: str
    driver_name: str
    address: str | None


@dataclass(frozen=True)
class ResolvedDevice:
    profile: DeviceProfile
    instance: str


@dataclass(frozen=True)
class BinData:
    format: BinDataFormat
    values: tuple[int | float, ...]
