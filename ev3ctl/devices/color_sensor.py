"""LEGO EV3 color sensor."""

from __future__ import annotations

from ev3ctl.core.attribute import decode_bin_data
from ev3ctl.core.driver import Driver
from ev3ctl.core.errors import UnsupportedFormatError
from ev3ctl.core.model import BinDataFormat
from ev3ctl.devices.sensor import Sensor

# Reflected light, LED red.
MODE_COL_REFLECT = "COL-REFLECT"
# Ambient light, LED dimly blue.
MODE_COL_AMBIENT = "COL-AMBIENT"
# Color, LED white.
MODE_COL_COLOR = "COL-COLOR"
# Raw reflected, LED red.
MODE_REF_RAW = "REF-RAW"
# Raw color components, LED white.
MODE_RGB_RAW = "RGB-RAW"
# Calibration, LED red flashing every 4 seconds then continuous.
MODE_COL_CAL = "COL-CAL"


class ColorSensor(Sensor):
    CLASS_NAME = "lego-sensor"
    DRIVER_NAMES = ("lego-ev3-color",)

    def __init__(self, driver: Driver) -> None:
        self.driver = driver

    def __repr__(self) -> str:
        return f"ColorSensor({self.driver!r})"

    def set_mode_col_reflect(self) -> None:
        self.set_mode(MODE_COL_REFLECT)

    def set_mode_col_ambient(self) -> None:
        self.set_mode(MODE_COL_AMBIENT)

    def set_mode_col_color(self) -> None:
        self.set_mode(MODE_COL_COLOR)

    def set_mode_ref_raw(self) -> None:
        self.set_mode(MODE_REF_RAW)

    def set_mode_rgb_raw(self) -> None:
        self.set_mode(MODE_RGB_RAW)

    def set_mode_col_cal(self) -> None:
        self.set_mode(MODE_COL_CAL)

    def is_mode(self, mode: str) -> bool:
        return self.get_mode() == mode

    def get_color(self) -> int:
        """Value for COL-REFLECT, COL-AMBIENT, COL-COLOR and REF-RAW."""
        return self.get_value0()

    def get_red(self) -> int:
        return self.get_value0()

    def get_green(self) -> int:
        return self.get_value1()

    def get_blue(self) -> int:
        return self.get_value2()

    def get_rgb(self) -> tuple[int, int, int]:
        """Red, green and blue components, each in the range 0-1020."""
        return self.get_red(), self.get_green(), self.get_blue()

    def get_bin_data(self) -> tuple[int, int, int]:
        """Red, green and blue read in one shot from ``bin_data`` (RGB-RAW mode)."""
        fmt = self.get_bin_data_format()
        if fmt is not BinDataFormat.S16:
            raise UnsupportedFormatError(
                f"Color sensor bin_data must be s16, sensor reports '{fmt.value}'"
            )
        red, green, blue = decode_bin_data(self.get_raw_bin_data(), fmt, 3)
        return int(red), int(green), int(blue)
