from __future__ import annotations

import threading
import time

import pytest

from ev3ctl.core.errors import ParseError
from ev3ctl.core.locking import ReadWriteLock
from ev3ctl.core.ports import MotorPort, SensorPort, parse_port


def test_port_addresses() -> None:
    assert [p.address() for p in SensorPort] == ["in1", "in2", "in3", "in4"]
    assert [p.address() for p in MotorPort] == ["outA", "outB", "outC", "outD"]


def test_parse_port_is_case_insensitive() -> None:
    assert parse_port("IN2") is SensorPort.IN2
    assert parse_port("outa") is MotorPort.OUT_A
    assert parse_port("outB", "motor") is MotorPort.OUT_B


def test_parse_port_rejects_unknown_tokens() -> None:
    with pytest.raises(ParseError):
        parse_port("in9")
    with pytest.raises(ParseError):
        parse_port("in1", "motor")
    with pytest.raises(ParseError):
        parse_port("in1", "servo")


def test_readers_do_not_block_each_other() -> None:
    lock = ReadWriteLock()
    inside = threading.Barrier(2, timeout=5)

    def reader() -> None:
        with lock.read_locked():
            inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    assert not any(thread.is_alive() for thread in threads)


def test_writer_waits_for_readers() -> None:
    lock = ReadWriteLock()
    events: list[str] = []

    lock.acquire_read()

    def writer() -> None:
        with lock.write_locked():
            events.append("write")

    thread = threading.Thread(target=writer)
    thread.start()
    time.sleep(0.05)
    events.append("read-done")
    lock.release_read()
    thread.join(timeout=5)

    assert events == ["read-done", "write"]
