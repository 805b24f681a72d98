"""Discover apps running on a device and let the user pick one."""

from __future__ import annotations

import logging
import subprocess
from typing import List, Optional, Sequence

from rich.console import Console

from . import devicectl
from .config import BUNDLE_PATH_MARKER, NO_MATCHING_PROCESSES, Settings
from .errors import DiscoveryError, ToolNotFoundError
from .formatting import format_application_entry
from .models import ApplicationInfo
from .parsing import parse_application_output
from .selection import ReadLine, choose

logger = logging.getLogger(__name__)


def discover_applications(
    device_id: str,
    settings: Optional[Settings] = None,
    runner: devicectl.Runner = subprocess.run,
) -> List[ApplicationInfo]:
    """List app bundles with a running process on ``device_id``.

    devicectl reports "No matching processes" as a failure; that case is an
    empty listing here, not an error.
    """
    settings = settings or Settings.from_env()
    result = devicectl.run(devicectl.list_processes_command(device_id, settings), runner=runner)
    if not result.ok:
        if result.mentions(NO_MATCHING_PROCESSES):
            logger.debug("No matching processes on %s", device_id)
            return []
        if devicectl.tool_missing(result):
            raise ToolNotFoundError("Failed to list applications: devicectl is not available.", result)
        raise DiscoveryError(f"Failed to list applications (exit status {result.returncode}).", result)

    bundle_lines = [line for line in result.stdout.splitlines() if BUNDLE_PATH_MARKER in line]
    applications = parse_application_output("\n".join(bundle_lines))
    logger.debug("Parsed %d application(s) from %d bundle line(s)", len(applications), len(bundle_lines))
    return applications


def select_application(
    applications: Sequence[ApplicationInfo],
    console: Console,
    read_line: Optional[ReadLine] = None,
) -> ApplicationInfo:
    """Return the application record the user picks."""
    return choose(
        applications,
        noun="application",
        describe=format_application_entry,
        summarize=lambda app: f"{app.label} ({app.bundle_id})",
        console=console,
        read_line=read_line,
    )
