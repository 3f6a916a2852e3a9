"""Typer CLI entrypoint."""

from __future__ import annotations

import logging

import typer

from ev3ctl.core.errors import Ev3ctlError
from ev3ctl.core.service import DeviceService

app = typer.Typer(help="Inspect and drive devices exposed as per-device attribute files")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log discovery and cache activity"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _build_service(driver_path: str | None = None) -> DeviceService:
    service = DeviceService(driver_path=driver_path)
    for warning in getattr(service, "load_warnings", ()):
        typer.echo(f"Warning: {warning}", err=True)
    for warning in getattr(service, "runtime_warnings", ()):
        typer.echo(f"Warning: {warning}", err=True)
    return service


_DRIVER_PATH = typer.Option(None, "--driver-path", help="Device tree root (default /sys/class/)")


@app.command("profiles")
def list_profiles(driver_path: str | None = _DRIVER_PATH) -> None:
    """List device profiles and the drivers they accept."""
    try:
        service = _build_service(driver_path)
        profiles = service.list_profiles()
        if not profiles:
            typer.echo("No profiles loaded")
            raise typer.Exit(code=1)

        for profile in profiles:
            typer.echo(f"{profile.id}: {profile.name} [{profile.class_name}]")
            typer.echo(f"  drivers: {', '.join(profile.driver_names)}")
            if profile.modes:
                typer.echo(f"  modes: {', '.join(profile.modes)}")
    except Ev3ctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("classes")
def list_classes(driver_path: str | None = _DRIVER_PATH) -> None:
    """List device classes present under the device tree root."""
    try:
        service = _build_service(driver_path)
        for class_name in service.list_classes():
            typer.echo(class_name)
    except Ev3ctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("devices")
def list_devices(
    class_name: str,
    driver_path: str | None = _DRIVER_PATH,
) -> None:
    """List instances of CLASS_NAME with their driver and address."""
    try:
        service = _build_service(driver_path)
        devices = service.list_devices(class_name)
        if not devices:
            typer.echo(f"No {class_name} devices found")
            return

        for device in devices:
            address = device.address or "<no-address>"
            typer.echo(f"{device.instance} {device.driver_name} {address}")
    except Ev3ctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("find")
def find_device(
    profile: str,
    port: str | None = typer.Option(None, "--port", help="Port such as in1 or outA"),
    all_matches: bool = typer.Option(False, "--all", help="List every match instead of requiring one"),
    driver_path: str | None = _DRIVER_PATH,
) -> None:
    """Find the instance for PROFILE, optionally on a given port."""
    try:
        service = _build_service(driver_path)
        if all_matches:
            matches = service.find_all(profile)
            if not matches:
                typer.echo(f"No {profile} devices found")
                return
            for match in matches:
                typer.echo(f"{match.profile.class_name}/{match.instance}")
            return
        resolved = service.resolve(profile, port=port)
        typer.echo(f"{resolved.profile.class_name}/{resolved.instance}")
    except Ev3ctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("get")
def get_attribute(
    class_name: str,
    instance: str,
    attribute: str,
    as_list: bool = typer.Option(False, "--list", help="Split the value into whitespace tokens"),
    driver_path: str | None = _DRIVER_PATH,
) -> None:
    """Print ATTRIBUTE of CLASS_NAME/INSTANCE."""
    try:
        service = _build_service(driver_path)
        if as_list:
            for token in service.read_attribute_list(class_name, instance, attribute):
                typer.echo(token)
            return
        typer.echo(service.read_attribute(class_name, instance, attribute))
    except Ev3ctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("set")
def set_attribute(
    class_name: str,
    instance: str,
    attribute: str,
    value: str,
    driver_path: str | None = _DRIVER_PATH,
) -> None:
    """Write VALUE to ATTRIBUTE of CLASS_NAME/INSTANCE."""
    try:
        service = _build_service(driver_path)
        service.write_attribute(class_name, instance, attribute, value)
        typer.echo(f"Set {class_name}/{instance}/{attribute}={value}")
    except Ev3ctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("bin-data")
def read_bin_data(
    class_name: str,
    instance: str,
    driver_path: str | None = _DRIVER_PATH,
) -> None:
    """Decode bin_data of CLASS_NAME/INSTANCE using its bin_data_format and num_values."""
    try:
        service = _build_service(driver_path)
        data = service.read_bin_data(class_name, instance)
        typer.echo(f"{data.format.value}: {' '.join(str(v) for v in data.values)}")
    except Ev3ctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
