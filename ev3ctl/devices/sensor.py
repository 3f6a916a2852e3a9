"""Attributes common to every ``lego-sensor`` device."""

from __future__ import annotations

from typing import Protocol

from ev3ctl.core.attribute import decode_bin_data
from ev3ctl.core.model import BinDataFormat
from ev3ctl.devices.base import Device


class Sensor(Device, Protocol):
    def get_mode(self) -> str:
        return self.get_attribute("mode").get()

    def set_mode(self, mode: str) -> None:
        """Switch mode. See the individual sensor for the modes it accepts."""
        self.get_attribute("mode").set_str(mode)

    def get_modes(self) -> list[str]:
        return self.get_attribute("modes").get_vec()

    def get_num_values(self) -> int:
        """Number of ``value<N>`` attributes valid in the current mode."""
        return self.get_attribute("num_values").get(int)

    def get_decimals(self) -> int:
        return self.get_attribute("decimals").get(int)

    def get_units(self) -> str:
        """Units of the current mode; empty when unknown."""
        return self.get_attribute("units").get()

    def get_fw_version(self) -> str:
        return self.get_attribute("fw_version").get()

    def get_poll_ms(self) -> int:
        return self.get_attribute("poll_ms").get(int)

    def set_poll_ms(self, poll_ms: int) -> None:
        """Polling period in milliseconds; 0 disables polling.

        Setting it too high can break input port autodetection.
        """
        if poll_ms < 0:
            raise ValueError("poll_ms must not be negative")
        self.get_attribute("poll_ms").set(poll_ms)

    def get_value(self, index: int) -> int:
        if not 0 <= index <= 7:
            raise ValueError(f"value index must be in 0..7, got {index}")
        return self.get_attribute(f"value{index}").get(int)

    def get_value0(self) -> int:
        return self.get_value(0)

    def get_value1(self) -> int:
        return self.get_value(1)

    def get_value2(self) -> int:
        return self.get_value(2)

    def get_text_value(self) -> str:
        return self.get_attribute("text_value").get()

    def get_bin_data_format(self) -> BinDataFormat:
        return BinDataFormat.parse(self.get_attribute("bin_data_format").get())

    def get_raw_bin_data(self) -> bytes:
        """Unscaled ``bin_data`` bytes; see ``bin_data_format`` and ``num_values``."""
        return self.get_attribute("bin_data").get_raw_data()

    def get_bin_data(self) -> tuple[int | float, ...]:
        fmt = self.get_bin_data_format()
        return decode_bin_data(self.get_raw_bin_data(), fmt, self.get_num_values())
