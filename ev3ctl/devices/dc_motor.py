"""DC motors driven by duty cycle (``dc-motor`` class)."""

from __future__ import annotations

from ev3ctl.core.driver import Driver
from ev3ctl.devices.base import Device

COMMAND_RUN_FOREVER = "run-forever"
COMMAND_RUN_TIMED = "run-timed"
COMMAND_RUN_DIRECT = "run-direct"
COMMAND_STOP = "stop"

POLARITY_NORMAL = "normal"
POLARITY_INVERSED = "inversed"

STATE_RUNNING = "running"
STATE_RAMPING = "ramping"

STOP_ACTION_COAST = "coast"
STOP_ACTION_BRAKE = "brake"


class DcMotor(Device):
    CLASS_NAME = "dc-motor"
    DRIVER_NAMES = ("rcx-motor",)

    def __init__(self, driver: Driver) -> None:
        self.driver = driver

    def __repr__(self) -> str:
        return f"DcMotor({self.driver!r})"

    def get_duty_cycle(self) -> int:
        return self.get_attribute("duty_cycle").get(int)

    def get_duty_cycle_sp(self) -> int:
        return self.get_attribute("duty_cycle_sp").get(int)

    def set_duty_cycle_sp(self, duty_cycle_sp: int) -> None:
        self.get_attribute("duty_cycle_sp").set(duty_cycle_sp)

    def get_polarity(self) -> str:
        return self.get_attribute("polarity").get()

    def set_polarity(self, polarity: str) -> None:
        self.get_attribute("polarity").set_str(polarity)

    def get_ramp_up_sp(self) -> int:
        return self.get_attribute("ramp_up_sp").get(int)

    def set_ramp_up_sp(self, ramp_up_sp: int) -> None:
        self.get_attribute("ramp_up_sp").set(ramp_up_sp)

    def get_ramp_down_sp(self) -> int:
        return self.get_attribute("ramp_down_sp").get(int)

    def set_ramp_down_sp(self, ramp_down_sp: int) -> None:
        self.get_attribute("ramp_down_sp").set(ramp_down_sp)

    def get_state(self) -> list[str]:
        return self.get_attribute("state").get_vec()

    def get_stop_action(self) -> str:
        return self.get_attribute("stop_action").get()

    def set_stop_action(self, stop_action: str) -> None:
        self.get_attribute("stop_action").set_str(stop_action)

    def get_time_sp(self) -> int:
        return self.get_attribute("time_sp").get(int)

    def set_time_sp(self, time_sp: int) -> None:
        self.get_attribute("time_sp").set(time_sp)

    def run_forever(self) -> None:
        self.set_command(COMMAND_RUN_FOREVER)

    def run_timed(self, time_sp: int | None = None) -> None:
        if time_sp is not None:
            self.set_time_sp(time_sp)
        self.set_command(COMMAND_RUN_TIMED)

    def stop(self) -> None:
        self.set_command(COMMAND_STOP)

    def is_running(self) -> bool:
        return STATE_RUNNING in self.get_state()

    def is_ramping(self) -> bool:
        return STATE_RAMPING in self.get_state()
