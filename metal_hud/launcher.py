"""Relaunch an installed app with the Metal performance HUD switched on."""

from __future__ import annotations

import json
import logging
import subprocess
from typing import List, Optional

from rich.console import Console

from . import devicectl
from .config import Settings
from .errors import LaunchError, MissingPathError, ToolNotFoundError
from .models import ApplicationInfo

logger = logging.getLogger(__name__)


def build_launch_command(device_id: str, app_path: str, settings: Optional[Settings] = None) -> List[str]:
    settings = settings or Settings.from_env()
    environment = json.dumps({settings.hud_env_var: settings.hud_value})
    return [
        settings.xcrun,
        "devicectl",
        "device",
        "process",
        "launch",
        "-e",
        environment,
        "--console",
        "--device",
        device_id,
        app_path,
    ]


def launch_app(
    device_id: str,
    app: ApplicationInfo,
    console: Console,
    *,
    dry_run: bool = False,
    settings: Optional[Settings] = None,
    runner: devicectl.Runner = subprocess.run,
) -> str:
    """Launch ``app`` on ``device_id`` with the HUD enabled.

    Returns the rendered command. With ``dry_run`` the command is only shown.
    """
    if not app.full_path:
        raise MissingPathError(f"Could not determine the installed path of {app.label}.")

    command = build_launch_command(device_id, app.full_path, settings)
    rendered = devicectl.format_command(command)

    if dry_run:
        console.print("\nMetal HUD launch command:")
        console.print(rendered, markup=False, highlight=False, soft_wrap=True)
        return rendered

    console.print("Launching with Metal HUD enabled...", style="bold cyan")
    console.print(f"Device: {device_id}", markup=False, highlight=False)
    console.print(f"App: {app.label}", markup=False, highlight=False)
    console.print(f"Path: {app.full_path}\n", markup=False, highlight=False)
    console.print("Command:")
    console.print(rendered, markup=False, highlight=False, soft_wrap=True)
    console.print()

    try:
        result = devicectl.run(command, runner=runner)
    except ToolNotFoundError as exc:
        raise ToolNotFoundError(f"Failed to launch {app.label}: {exc}") from exc

    if not result.ok:
        logger.debug("Launch failed: %s", result.message)
        raise LaunchError(f"Failed to launch {app.label} (exit status {result.returncode}).", result)

    console.print("App launched. The Metal HUD overlay should now show GPU performance.", style="bold green")
    if result.stdout.strip():
        console.print("\nOutput:")
        console.print(result.stdout.rstrip(), markup=False, highlight=False)
    return rendered
