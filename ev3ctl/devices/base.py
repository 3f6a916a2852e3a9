"""Device capability interface shared by sensors and motors."""

from __future__ import annotations

from typing import ClassVar, Protocol, TypeVar

from ev3ctl.core.attribute import Attribute
from ev3ctl.core.discovery import (
    find_all_instances_by_driver,
    find_instance_by_driver,
    find_instance_by_port_and_driver,
)
from ev3ctl.core.driver import Driver
from ev3ctl.core.ports import Port

D = TypeVar("D", bound="Device")


class Device(Protocol):
    """Concrete devices provide ``driver`` and the class-level identity.

    Everything else is built on ``get_attribute``.
    """

    CLASS_NAME: ClassVar[str]
    DRIVER_NAMES: ClassVar[tuple[str, ...]]

    driver: Driver

    @classmethod
    def get(cls: type[D], port: Port) -> D:
        """Device connected to ``port``."""
        name = find_instance_by_port_and_driver(cls.CLASS_NAME, port, cls.DRIVER_NAMES)
        return cls(Driver(cls.CLASS_NAME, name))

    @classmethod
    def find(cls: type[D]) -> D:
        """The only connected device of this type."""
        name = find_instance_by_driver(cls.CLASS_NAME, cls.DRIVER_NAMES)
        return cls(Driver(cls.CLASS_NAME, name))

    @classmethod
    def find_all(cls: type[D]) -> list[D]:
        """Every connected device of this type."""
        return [
            cls(Driver(cls.CLASS_NAME, name))
            for name in find_all_instances_by_driver(cls.CLASS_NAME, cls.DRIVER_NAMES)
        ]

    def get_attribute(self, name: str) -> Attribute:
        return self.driver.get_attribute(name)

    def get_address(self) -> str:
        return self.get_attribute("address").get()

    def get_driver_name(self) -> str:
        return self.get_attribute("driver_name").get()

    def get_commands(self) -> list[str]:
        return self.get_attribute("commands").get_vec()

    def set_command(self, command: str) -> None:
        self.get_attribute("command").set_str(command)
