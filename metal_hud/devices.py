"""Discover connected Apple devices and let the user pick one."""

from __future__ import annotations

import logging
import subprocess
from typing import List, Optional, Sequence

from rich.console import Console

from . import devicectl
from .config import Settings
from .errors import DiscoveryError, ToolNotFoundError
from .formatting import format_device_entry
from .models import DeviceInfo
from .parsing import parse_device_output
from .selection import ReadLine, choose

logger = logging.getLogger(__name__)


def discover_devices(
    settings: Optional[Settings] = None,
    runner: devicectl.Runner = subprocess.run,
) -> List[DeviceInfo]:
    """Run ``devicectl list devices`` and parse the result."""
    settings = settings or Settings.from_env()
    result = devicectl.run(devicectl.list_devices_command(settings), runner=runner)
    if not result.ok:
        if devicectl.tool_missing(result):
            raise ToolNotFoundError("Failed to list devices: devicectl is not available.", result)
        raise DiscoveryError(f"Failed to list devices (exit status {result.returncode}).", result)

    devices = parse_device_output(result.stdout)
    logger.debug("Parsed %d device(s)", len(devices))
    return devices


def select_device(
    devices: Sequence[DeviceInfo],
    console: Console,
    read_line: Optional[ReadLine] = None,
) -> str:
    """Return the identifier of the device the user picks."""
    device = choose(
        devices,
        noun="device",
        describe=format_device_entry,
        summarize=lambda d: f"{d.label} ({d.identifier})",
        console=console,
        read_line=read_line,
    )
    return device.identifier
