"""Typed access to a single device attribute file.

An ``Attribute`` is bound to one path and one open descriptor for its whole
lifetime. Reads and writes use positional I/O on that descriptor, so a handle
can be shared freely between threads and every access sees the device's
current value.
"""

from __future__ import annotations

import logging
import os
import stat
import struct
import weakref
from pathlib import Path
from typing import Any, Callable

from ev3ctl.core.config import resolve_driver_path
from ev3ctl.core.errors import AttributeIOError, AttributeParseError, AttributeResolutionError
from ev3ctl.core.model import BinDataFormat

_READ_SIZE = 4096
_SYSFS_ROOT = "/sys/"
_TRUE_TOKENS = frozenset({"1", "true"})
_FALSE_TOKENS = frozenset({"0", "false"})
LOGGER = logging.getLogger(__name__)


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _TRUE_TOKENS:
        return True
    if lowered in _FALSE_TOKENS:
        return False
    raise ValueError(f"invalid boolean token {text!r}")


_PARSERS: dict[type, Callable[[str], Any]] = {
    str: str,
    int: int,
    float: float,
    bool: _parse_bool,
}


def format_value(value: Any) -> str:
    """Canonical text written for ``value``."""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def open_flags(mode: int) -> int | None:
    """Open flags for a file with permission bits ``mode``.

    Only the owner bits count, whoever the caller is: sysfs refuses a
    write-mode open of an attribute without a store method, even for root.
    """
    readable = bool(mode & stat.S_IRUSR)
    writable = bool(mode & stat.S_IWUSR)
    if readable and writable:
        return os.O_RDWR
    if readable:
        return os.O_RDONLY
    if writable:
        return os.O_WRONLY
    return None


class Attribute:
    def __init__(
        self,
        path: Path,
        fd: int,
        *,
        class_name: str,
        instance: str,
        attribute: str,
    ) -> None:
        self.path = path
        self.class_name = class_name
        self.instance = instance
        self.attribute = attribute
        self._fd = fd
        # sysfs replaces the whole value on each write; plain files keep the tail.
        self._truncate = not str(path.resolve()).startswith(_SYSFS_ROOT)
        self._finalizer = weakref.finalize(self, os.close, fd)

    @classmethod
    def from_sys_class(
        cls,
        class_name: str,
        name: str,
        attribute: str,
        *,
        driver_path: str | os.PathLike[str] | None = None,
    ) -> Attribute:
        """Open ``<root>/<class_name>/<name>/<attribute>``."""
        path = resolve_driver_path(driver_path) / class_name / name / attribute
        context = {"class_name": class_name, "instance": name, "attribute": attribute}

        try:
            flags = open_flags(os.stat(path).st_mode)
        except OSError as exc:
            raise AttributeResolutionError(f"Could not stat attribute {path}: {exc}", **context) from exc
        if flags is None:
            raise AttributeResolutionError(f"Attribute {path} is neither readable nor writable", **context)

        try:
            fd = os.open(path, flags | os.O_CLOEXEC)
        except OSError as exc:
            raise AttributeResolutionError(f"Could not open attribute {path}: {exc}", **context) from exc

        LOGGER.debug("Resolved attribute %s (flags=%#x)", path, flags)
        return cls(path, fd, **context)

    def __repr__(self) -> str:
        return f"Attribute({str(self.path)!r})"

    def _error(self, action: str, exc: OSError) -> AttributeIOError:
        return AttributeIOError(
            f"Could not {action} {self.path}: {exc}",
            class_name=self.class_name,
            instance=self.instance,
            attribute=self.attribute,
        )

    def _parse_error(self, message: str) -> AttributeParseError:
        return AttributeParseError(f"{self.path}: {message}")

    def get_raw_data(self) -> bytes:
        """Return the undecoded attribute content."""
        chunks: list[bytes] = []
        offset = 0
        try:
            while True:
                chunk = os.pread(self._fd, _READ_SIZE, offset)
                chunks.append(chunk)
                offset += len(chunk)
                if len(chunk) < _READ_SIZE:
                    break
        except OSError as exc:
            raise self._error("read", exc) from exc
        return b"".join(chunks)

    def _read_text(self) -> str:
        raw = self.get_raw_data()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise self._parse_error(f"content is not valid UTF-8 ({exc})") from exc
        return text[:-1] if text.endswith("\n") else text

    def get(self, kind: type = str) -> Any:
        """Read the attribute and parse it as ``str``, ``int``, ``float`` or ``bool``."""
        parser = _PARSERS.get(kind)
        if parser is None:
            raise TypeError(f"Unsupported attribute type {kind.__name__}")
        text = self._read_text()
        try:
            return parser(text)
        except ValueError as exc:
            raise self._parse_error(f"cannot parse {text!r} as {kind.__name__}") from exc

    def get_vec(self) -> list[str]:
        """Read a space-delimited attribute such as ``modes`` or ``state``."""
        return self._read_text().split()

    def set_str(self, value: str) -> None:
        """Write pre-formatted content, replacing what was there."""
        data = value.encode("utf-8")
        try:
            os.pwrite(self._fd, data, 0)
            if self._truncate:
                os.ftruncate(self._fd, len(data))
        except OSError as exc:
            raise self._error("write", exc) from exc

    def set(self, value: Any) -> None:
        self.set_str(format_value(value))


def decode_bin_data(raw: bytes, fmt: BinDataFormat, count: int | None = None) -> tuple[int | float, ...]:
    """Split ``raw`` into ``fmt``-sized values.

    Trailing bytes that do not form a whole value are ignored. With ``count``
    only the first ``count`` values are returned.
    """
    usable = len(raw) - len(raw) % fmt.size
    values = tuple(value for (value,) in struct.iter_unpack(fmt.struct_code, raw[:usable]))
    if count is None:
        return values
    if count < 0 or count > len(values):
        raise AttributeParseError(
            f"bin_data holds {len(values)} {fmt.value} values, {count} requested"
        )
    return values[:count]
