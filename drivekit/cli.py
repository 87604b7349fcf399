"""Command line interface for drivekit.

Every command prints JSON on stdout. Failures print "Error: <message>"
on stderr and exit with status 1.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from drivekit.config.paths import get_log_file_path
from drivekit.config.settings import AppSettings, SettingsManager
from drivekit.exceptions import DriveError
from drivekit.models import NetworkShareRequest, ShareProtocol
from drivekit.service import DriveService
from drivekit.utils.logging import get_logger, setup_logging
from drivekit.utils.validators import validate_timeout

logger = get_logger("drivekit.cli")

SETTINGS_MANAGER_KEY = "drivekit.settings_manager"

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


def _emit(data) -> None:
    click.echo(json.dumps(data, indent=2))


def _fail(error: DriveError) -> None:
    logger.debug(f"Command failed: {error}")
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), help="Also log to this file")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), help="Settings JSON file")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, log_file: Optional[Path], config_path: Optional[Path]):
    """drivekit - list drives and mount volumes and network shares"""
    manager = SettingsManager(config_path)
    settings = manager.load()
    ctx.meta[SETTINGS_MANAGER_KEY] = manager

    level = logging.DEBUG if verbose else settings.log_level_value
    if log_file is None and settings.log_to_file:
        log_file = get_log_file_path()
    setup_logging(level=level, log_file=log_file)

    ctx.obj = DriveService(settings=settings)


@cli.command(name="ls")
@click.argument("path")
@click.pass_obj
def list_directory(service: DriveService, path: str):
    """List the entries of a directory"""
    try:
        _emit(service.list_directory(path).to_dict())
    except DriveError as e:
        _fail(e)


@cli.command(name="drives")
@click.pass_obj
def list_drives(service: DriveService):
    """List mounted drives"""
    try:
        _emit([drive.to_dict() for drive in service.list_drives()])
    except DriveError as e:
        _fail(e)


@cli.command(name="devices")
@click.pass_obj
def list_devices(service: DriveService):
    """List unmounted removable devices (Linux)"""
    _emit([device.to_dict() for device in service.list_mountable_devices()])


@cli.command(name="mount")
@click.argument("device")
@click.pass_obj
def mount(service: DriveService, device: str):
    """Mount a device"""
    try:
        _emit({"mount_point": service.mount(device)})
    except DriveError as e:
        _fail(e)


@cli.command(name="unmount")
@click.argument("device")
@click.argument("mount_point", required=False, default="")
@click.pass_obj
def unmount(service: DriveService, device: str, mount_point: str):
    """Unmount a device or mount point"""
    try:
        service.unmount(device, mount_point)
        _emit({"unmounted": True})
    except DriveError as e:
        _fail(e)


@cli.command(name="mount-share")
@click.option(
    "--protocol", "-t", required=True,
    type=click.Choice([protocol.value for protocol in ShareProtocol]),
    help="Share protocol",
)
@click.option("--host", "-h", required=True, help="Server host name or IP")
@click.option("--port", "-p", type=int, default=None, help="Server port (SSHFS)")
@click.option("--username", "-u", default=None, help="User name")
@click.option("--password", default=None, help="Password (prompted with --ask-password)")
@click.option("--ask-password", is_flag=True, help="Prompt for the password")
@click.option("--remember", is_flag=True, help="Save the password in the system keyring")
@click.argument("remote_path")
@click.argument("mount_name")
@click.pass_obj
def mount_share(
    service: DriveService,
    protocol: str,
    host: str,
    port: Optional[int],
    username: Optional[str],
    password: Optional[str],
    ask_password: bool,
    remember: bool,
    remote_path: str,
    mount_name: str,
):
    """Mount a network share (sshfs, nfs or smb)"""
    if ask_password:
        password = click.prompt("Password", hide_input=True)

    request = NetworkShareRequest(
        protocol=protocol,
        host=host,
        remote_path=remote_path,
        mount_name=mount_name,
        port=port,
        username=username,
        password=password,
    )
    try:
        _emit({"mount_point": service.mount_network_share(request, remember_password=remember)})
    except DriveError as e:
        _fail(e)


@cli.command(name="parent")
@click.argument("path")
@click.pass_obj
def parent(service: DriveService, path: str):
    """Print the parent directory of a path"""
    _emit({"parent": service.parent_of(path)})


@cli.command(name="exists")
@click.argument("path")
@click.pass_obj
def exists(service: DriveService, path: str):
    """Check whether a path exists"""
    _emit({"exists": service.exists(path)})


@cli.command(name="forget-password")
@click.option(
    "--protocol", "-t", required=True,
    type=click.Choice([protocol.value for protocol in ShareProtocol]),
    help="Share protocol",
)
@click.option("--host", "-h", required=True, help="Server host name or IP")
@click.option("--username", "-u", default=None, help="User name")
@click.pass_obj
def forget_password(service: DriveService, protocol: str, host: str, username: Optional[str]):
    """Remove a share password saved with --remember"""
    request = NetworkShareRequest(
        protocol=protocol,
        host=host,
        remote_path="",
        mount_name="",
        username=username,
    )
    _emit({"forgotten": service.forget_password(request)})


def _parse_setting(key: str, raw: str):
    """Convert a command line value to the type of the named setting."""
    defaults = AppSettings().to_dict()
    if key not in defaults:
        raise click.BadParameter(f"Unknown setting: {key}", param_hint="KEY")

    current = defaults[key]
    if isinstance(current, bool):
        if raw.lower() in TRUE_VALUES:
            return True
        if raw.lower() in FALSE_VALUES:
            return False
        raise click.BadParameter(f"{key} must be true or false", param_hint="VALUE")

    # command_timeout is the only numeric setting
    if isinstance(current, int):
        is_valid, error = validate_timeout(raw)
        if not is_valid:
            raise click.BadParameter(error, param_hint="VALUE")
        return int(raw)

    return raw


@cli.group(name="config")
def config():
    """Show or change persisted settings"""


@config.command(name="show")
@click.pass_context
def config_show(ctx: click.Context):
    """Print the current settings"""
    manager = ctx.meta[SETTINGS_MANAGER_KEY]
    _emit(manager.load().to_dict())


@config.command(name="set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def config_set(ctx: click.Context, key: str, value: str):
    """Change one setting and save it"""
    manager = ctx.meta[SETTINGS_MANAGER_KEY]
    settings = manager.update(**{key: _parse_setting(key, value)})
    _emit(settings.to_dict())


@config.command(name="reset")
@click.pass_context
def config_reset(ctx: click.Context):
    """Restore default settings"""
    manager = ctx.meta[SETTINGS_MANAGER_KEY]
    _emit(manager.reset().to_dict())


def main() -> None:
    """Console script entry point."""
    cli()
