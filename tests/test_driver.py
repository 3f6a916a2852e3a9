from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from conftest import make_device
from ev3ctl.core import driver as driver_module
from ev3ctl.core.attribute import Attribute
from ev3ctl.core.driver import Driver
from ev3ctl.core.errors import AttributeResolutionError


@pytest.fixture
def resolutions(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Record every filesystem resolution made by ``Driver``."""
    calls: list[str] = []
    original = Attribute.from_sys_class

    def counting(class_name, name, attribute, *, driver_path=None):
        calls.append(attribute)
        return original(class_name, name, attribute, driver_path=driver_path)

    monkeypatch.setattr(driver_module.Attribute, "from_sys_class", counting)
    return calls


def test_construction_does_not_touch_filesystem(tmp_path: Path, resolutions: list[str]) -> None:
    driver = Driver("lego-sensor", "sensor9", driver_path=tmp_path / "missing")

    assert driver.cached_attributes() == ()
    assert resolutions == []
    assert repr(driver) == "Driver(class_name='lego-sensor', name='sensor9')"


def test_second_lookup_reuses_cached_handle(tmp_path: Path, resolutions: list[str]) -> None:
    make_device(tmp_path, "lego-sensor", "sensor0", value0=5)
    driver = Driver("lego-sensor", "sensor0", driver_path=tmp_path)

    first = driver.get_attribute("value0")
    second = driver.get_attribute("value0")

    assert first is second
    assert resolutions == ["value0"]
    assert driver.cached_attributes() == ("value0",)


def test_clones_share_cache(tmp_path: Path, resolutions: list[str]) -> None:
    make_device(tmp_path, "lego-sensor", "sensor0", value0=5, mode="TOUCH")
    driver = Driver("lego-sensor", "sensor0", driver_path=tmp_path)
    clone = driver.clone()

    handle = clone.get_attribute("value0")

    assert driver.get_attribute("value0") is handle
    assert clone.shares_cache_with(driver)
    assert resolutions == ["value0"]

    driver.get_attribute("mode")
    assert set(clone.cached_attributes()) == {"value0", "mode"}


def test_independent_drivers_do_not_share_cache(tmp_path: Path, resolutions: list[str]) -> None:
    make_device(tmp_path, "lego-sensor", "sensor0", value0=5)
    first = Driver("lego-sensor", "sensor0", driver_path=tmp_path)
    second = Driver("lego-sensor", "sensor0", driver_path=tmp_path)

    first.get_attribute("value0")
    second.get_attribute("value0")

    assert not first.shares_cache_with(second)
    assert resolutions == ["value0", "value0"]


def test_resolution_failure_is_raised_and_not_cached(tmp_path: Path, resolutions: list[str]) -> None:
    device_dir = make_device(tmp_path, "lego-sensor", "sensor0")
    driver = Driver("lego-sensor", "sensor0", driver_path=tmp_path)

    with pytest.raises(AttributeResolutionError):
        driver.get_attribute("value3")
    assert driver.cached_attributes() == ()

    (device_dir / "value3").write_text("12\n")

    assert driver.get_attribute("value3").get(int) == 12
    assert resolutions == ["value3", "value3"]


def test_concurrent_misses_share_a_single_winner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    make_device(tmp_path, "lego-sensor", "sensor0", value0=5)
    driver = Driver("lego-sensor", "sensor0", driver_path=tmp_path)
    barrier = threading.Barrier(2, timeout=5)
    original = Attribute.from_sys_class

    def racing(class_name, name, attribute, *, driver_path=None):
        # Both threads have missed the cache before either inserts.
        barrier.wait()
        return original(class_name, name, attribute, driver_path=driver_path)

    monkeypatch.setattr(driver_module.Attribute, "from_sys_class", racing)

    with ThreadPoolExecutor(max_workers=2) as pool:
        handles = list(pool.map(lambda d: d.get_attribute("value0"), [driver, driver.clone()]))

    assert handles[0] is handles[1]
    assert driver.cached_attributes() == ("value0",)


def test_many_threads_read_through_one_handle(tmp_path: Path, resolutions: list[str]) -> None:
    make_device(tmp_path, "lego-sensor", "sensor0", value0=321)
    driver = Driver("lego-sensor", "sensor0", driver_path=tmp_path)
    driver.get_attribute("value0")

    def read(_: int) -> int:
        return driver.clone().get_attribute("value0").get(int)

    with ThreadPoolExecutor(max_workers=8) as pool:
        values = list(pool.map(read, range(200)))

    assert values == [321] * 200
    assert resolutions == ["value0"]


def test_root_is_pinned_by_first_resolution(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    first_root = tmp_path / "first"
    second_root = tmp_path / "second"
    make_device(first_root, "lego-sensor", "sensor0", value0=1, value1=2)
    make_device(second_root, "lego-sensor", "sensor0", value0=10, value1=20)
    monkeypatch.setenv("EV3CTL_DRIVER_PATH", str(first_root))
    driver = Driver("lego-sensor", "sensor0")
    driver.get_attribute("value0")

    monkeypatch.setenv("EV3CTL_DRIVER_PATH", str(second_root))

    assert driver.clone().get_attribute("value1").get(int) == 2
    assert Driver("lego-sensor", "sensor0").get_attribute("value1").get(int) == 20
