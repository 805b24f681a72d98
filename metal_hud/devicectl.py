"""Build and run ``xcrun devicectl`` invocations."""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Callable, List, Sequence

from .config import Settings
from .errors import ToolNotFoundError

logger = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[str]"]

TOOL_MISSING_MARKERS = ("command not found", "xcrun")


@dataclass
class CommandResult:
    argv: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def message(self) -> str:
        parts = [part.strip() for part in (self.stderr, self.stdout) if part and part.strip()]
        return "\n".join(parts)

    def mentions(self, text: str) -> bool:
        return text.lower() in self.message.lower()


def list_devices_command(settings: Settings) -> List[str]:
    return [settings.xcrun, "devicectl", "list", "devices"]


def list_processes_command(device_id: str, settings: Settings) -> List[str]:
    return [settings.xcrun, "devicectl", "device", "info", "processes", "--device", device_id]


def format_command(argv: Sequence[str]) -> str:
    """Render an argv list the way it would be typed into a shell."""
    return shlex.join(argv)


def run(argv: Sequence[str], runner: Runner = subprocess.run) -> CommandResult:
    """Run a command to completion and capture its output.

    Blocks until the process exits. A non-zero exit is returned, not raised;
    only a command that cannot be started at all raises ``ToolNotFoundError``.
    """
    logger.debug("Running: %s", format_command(argv))
    try:
        completed = runner(list(argv), capture_output=True, encoding="utf-8", errors="replace", check=False)
    except OSError as exc:
        raise ToolNotFoundError(f"Could not run {argv[0]}: {exc}") from exc

    result = CommandResult(
        argv=list(argv),
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
    logger.debug("%s exited with status %d", argv[0], result.returncode)
    return result


def tool_missing(result: CommandResult) -> bool:
    """Whether a failed command looks like xcrun or devicectl is not installed."""
    return any(marker in result.message for marker in TOOL_MISSING_MARKERS)
