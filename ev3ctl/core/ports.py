"""Physical connector identities."""

from __future__ import annotations

from enum import Enum
from typing import Protocol

from ev3ctl.core.errors import ParseError


class Port(Protocol):
    def address(self) -> str:
        """Return the connector name as reported in the ``address`` attribute."""


class SensorPort(Enum):
    IN1 = "in1"
    IN2 = "in2"
    IN3 = "in3"
    IN4 = "in4"

    def address(self) -> str:
        return self.value


class MotorPort(Enum):
    OUT_A = "outA"
    OUT_B = "outB"
    OUT_C = "outC"
    OUT_D = "outD"

    def address(self) -> str:
        return self.value


PORT_KINDS: dict[str, type[SensorPort] | type[MotorPort]] = {
    "sensor": SensorPort,
    "motor": MotorPort,
}


def parse_port(token: str, kind: str | None = None) -> SensorPort | MotorPort:
    """Map a connector token such as ``in2`` or ``outB`` to its port.

    ``kind`` restricts the lookup to ``sensor`` or ``motor`` ports.
    """
    normalized = token.strip().lower()
    if kind is not None and kind not in PORT_KINDS:
        raise ParseError(f"Unknown port kind '{kind}'")
    families = [PORT_KINDS[kind]] if kind else list(PORT_KINDS.values())
    for family in families:
        for port in family:
            if port.value.lower() == normalized:
                return port
    raise ParseError(f"Unknown port '{token}'")
