"""Per-device attribute cache.

A ``Driver`` creates an ``Attribute`` the first time a name is requested and
hands out the cached handle afterwards. Clones share the cache, so any clone
resolving an attribute benefits all the others.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ev3ctl.core.attribute import Attribute
from ev3ctl.core.config import resolve_driver_path
from ev3ctl.core.locking import ReadWriteLock

LOGGER = logging.getLogger(__name__)


class _AttributeCache:
    def __init__(self) -> None:
        self.lock = ReadWriteLock()
        self.attributes: dict[str, Attribute] = {}
        self.root: Path | None = None


class Driver:
    def __init__(
        self,
        class_name: str,
        name: str,
        *,
        driver_path: str | os.PathLike[str] | None = None,
    ) -> None:
        """All attributes use the path ``<driver_path>/<class_name>/<name>``."""
        self.class_name = class_name
        self.name = name
        self.driver_path = driver_path
        self._cache = _AttributeCache()

    def __repr__(self) -> str:
        return f"Driver(class_name={self.class_name!r}, name={self.name!r})"

    def clone(self) -> Driver:
        """Return a driver for the same device sharing this driver's cache."""
        twin = Driver.__new__(Driver)
        twin.class_name = self.class_name
        twin.name = self.name
        twin.driver_path = self.driver_path
        twin._cache = self._cache
        return twin

    def shares_cache_with(self, other: Driver) -> bool:
        return self._cache is other._cache

    def cached_attributes(self) -> tuple[str, ...]:
        with self._cache.lock.read_locked():
            return tuple(self._cache.attributes)

    def get_attribute(self, attribute_name: str) -> Attribute:
        """Return the handle for ``attribute_name``, resolving it on first use.

        Resolution happens outside the lock. Two threads missing at the same
        time both resolve, the first insert wins and both get that handle.
        Raises ``AttributeResolutionError`` when the attribute cannot be opened;
        failures are not cached. The device-tree root is fixed by the first
        resolution and shared by all clones.
        """
        cache = self._cache
        with cache.lock.read_locked():
            attribute = cache.attributes.get(attribute_name)
            root = cache.root
        if attribute is not None:
            return attribute

        if root is None:
            root = resolve_driver_path(self.driver_path)
            with cache.lock.write_locked():
                if cache.root is None:
                    cache.root = root
                root = cache.root

        resolved = Attribute.from_sys_class(
            self.class_name,
            self.name,
            attribute_name,
            driver_path=root,
        )

        with cache.lock.write_locked():
            attribute = cache.attributes.setdefault(attribute_name, resolved)
        if attribute is resolved:
            LOGGER.debug("Cached %s for %r", attribute_name, self)
        return attribute
