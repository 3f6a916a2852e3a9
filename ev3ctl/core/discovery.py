"""Locate device instances under ``<root>/<class_name>``."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from ev3ctl.core.attribute import Attribute
from ev3ctl.core.config import resolve_driver_path
from ev3ctl.core.errors import AttributeIOError, DeviceNotConnectedError, MultipleMatchesError
from ev3ctl.core.ports import Port

LOGGER = logging.getLogger(__name__)

DriverPath = str | os.PathLike[str] | None


def _iter_instances(class_name: str, root: Path) -> Iterator[str]:
    """Yield instance names in filesystem listing order."""
    class_dir = root / class_name
    try:
        entries = os.listdir(class_dir)
    except OSError as exc:
        raise AttributeIOError(
            f"Could not list device class {class_dir}: {exc}", class_name=class_name
        ) from exc

    for name in entries:
        try:
            name.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise AttributeIOError(
                f"Device name {name!r} in {class_dir} is not valid UTF-8", class_name=class_name
            ) from exc
        yield name


def _read(class_name: str, name: str, attribute: str, root: Path) -> str:
    return Attribute.from_sys_class(class_name, name, attribute, driver_path=root).get(str)


def find_instance_by_port_and_driver(
    class_name: str,
    port: Port,
    driver_names: Sequence[str],
    *,
    driver_path: DriverPath = None,
) -> str:
    """Return the first instance on ``port`` whose driver is in ``driver_names``.

    The port matches when its address is contained in the instance's
    ``address`` attribute, so compound addresses such as ``ev3-ports:in1``
    match ``in1``.
    """
    port_address = port.address()
    root = resolve_driver_path(driver_path)
    for name in _iter_instances(class_name, root):
        address = _read(class_name, name, "address", root)
        if port_address not in address:
            continue
        if address != port_address:
            LOGGER.debug("%s/%s: address %r matched port %r by containment", class_name, name, address, port_address)

        driver_name = _read(class_name, name, "driver_name", root)
        if driver_name in driver_names:
            LOGGER.debug("Found %s/%s (%s) on %s", class_name, name, driver_name, port_address)
            return name

    raise DeviceNotConnectedError(device=driver_names, port=port_address)


def find_all_instances_by_driver(
    class_name: str,
    driver_names: Sequence[str],
    *,
    driver_path: DriverPath = None,
) -> list[str]:
    """Return every instance whose driver is in ``driver_names``, in listing order."""
    found: list[str] = []
    root = resolve_driver_path(driver_path)
    for name in _iter_instances(class_name, root):
        driver_name = _read(class_name, name, "driver_name", root)
        if driver_name in driver_names:
            found.append(name)
    LOGGER.debug("Instances of %s with driver %s: %s", class_name, list(driver_names), found)
    return found


def find_instance_by_driver(
    class_name: str,
    driver_names: Sequence[str],
    *,
    driver_path: DriverPath = None,
) -> str:
    """Return the only instance whose driver is in ``driver_names``.

    Raises ``DeviceNotConnectedError`` for no match and ``MultipleMatchesError``
    listing all candidates when more than one device matches.
    """
    names = find_all_instances_by_driver(class_name, driver_names, driver_path=driver_path)
    if not names:
        raise DeviceNotConnectedError(device=driver_names, port=None)
    if len(names) > 1:
        raise MultipleMatchesError(device=driver_names, instances=names)
    return names[0]
