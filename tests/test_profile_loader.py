from __future__ import annotations

from pathlib import Path

import pytest

from ev3ctl.core.errors import ProfileValidationError
from ev3ctl.core.profile_loader import load_profiles


def _write_profile(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_load_packaged_profiles() -> None:
    loaded = load_profiles()
    assert "ev3_color" in loaded.profiles
    profile = loaded.profiles["ev3_color"]
    assert profile.class_name == "lego-sensor"
    assert profile.driver_names == ("lego-ev3-color",)
    assert profile.port == "sensor"
    assert "RGB-RAW" in profile.modes
    assert loaded.warnings == ()


def test_missing_required_keys_rejected(tmp_path: Path) -> None:
    _write_profile(
        tmp_path / "cfg" / "ev3ctl" / "profiles" / "missing.yaml",
        """
id: missing
name: Missing
class_name: lego-sensor
""",
    )

    with pytest.raises(ProfileValidationError):
        load_profiles()


def test_empty_driver_names_rejected(tmp_path: Path) -> None:
    _write_profile(
        tmp_path / "data" / "ev3ctl" / "profiles" / "empty.yaml",
        """
id: empty
name: Empty
class_name: lego-sensor
driver_names: []
""",
    )

    with pytest.raises(ProfileValidationError):
        load_profiles()


def test_unknown_port_kind_rejected(tmp_path: Path) -> None:
    _write_profile(
        tmp_path / "cfg" / "ev3ctl" / "profiles" / "servo.yaml",
        """
id: servo
name: Servo
class_name: servo-motor
driver_names: [ms-8ch-servo]
port: servo
""",
    )

    with pytest.raises(ProfileValidationError):
        load_profiles()


def test_user_profile_override_packaged(tmp_path: Path) -> None:
    _write_profile(
        tmp_path / "cfg" / "ev3ctl" / "profiles" / "override.yaml",
        """
id: ev3_color
name: User Override
class_name: lego-sensor
driver_names: [lego-ev3-color, ht-nxt-color-v2]
port: sensor
""",
    )

    loaded = load_profiles()
    assert loaded.profiles["ev3_color"].name == "User Override"
    assert loaded.profiles["ev3_color"].driver_names == ("lego-ev3-color", "ht-nxt-color-v2")
    assert any("overrides" in warning for warning in loaded.warnings)


def test_duplicate_yaml_keys_rejected(tmp_path: Path) -> None:
    _write_profile(
        tmp_path / "cfg" / "ev3ctl" / "profiles" / "dup.yaml",
        """
id: dup
name: Duplicate
class_name: lego-sensor
class_name: tacho-motor
driver_names: [lego-ev3-color]
""",
    )

    with pytest.raises(ProfileValidationError):
        load_profiles()


def test_duplicate_driver_names_rejected(tmp_path: Path) -> None:
    _write_profile(
        tmp_path / "cfg" / "ev3ctl" / "profiles" / "twice.yaml",
        """
id: twice
name: Twice
class_name: lego-sensor
driver_names: [lego-ev3-us, lego-ev3-us]
""",
    )

    with pytest.raises(ProfileValidationError):
        load_profiles()


def test_user_profile_without_port_defaults_to_none(tmp_path: Path) -> None:
    _write_profile(
        tmp_path / "data" / "ev3ctl" / "profiles" / "led.yml",
        """
id: brick_led
name: Brick LED
class_name: leds
driver_names: [leds-gpio]
""",
    )

    profile = load_profiles().profiles["brick_led"]
    assert profile.port == "none"
    assert profile.modes == ()
