"""Entry point for the metal-hud command line tool."""

from __future__ import annotations

import argparse
import logging
import subprocess
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .applications import discover_applications, select_application
from .config import Settings
from .devicectl import Runner
from .devices import discover_devices, select_device
from .errors import MetalHudError, hints_for
from .formatting import devices_to_json, format_device_table
from .launcher import launch_app
from .selection import ReadLine

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metal-hud",
        description="Relaunch an app on a connected Apple device with the Metal performance HUD enabled.",
    )
    parser.add_argument(
        "--no-launch",
        dest="launch",
        action="store_false",
        help="show the launch command instead of running it",
    )
    parser.add_argument("--list", action="store_true", help="only list connected devices")
    parser.add_argument("--json", action="store_true", help="print the devices as JSON (requires --list)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every devicectl invocation")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool) -> None:
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[handler],
        force=True,
    )


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    console: Optional[Console] = None,
    read_line: Optional[ReadLine] = None,
    runner: Runner = subprocess.run,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.json and not args.list:
        parser.error("--json can only be used with --list")
    configure_logging(args.verbose)
    console = console or Console()

    try:
        return _run(args, Settings.from_env(), console, read_line, runner)
    except MetalHudError as exc:
        _report_error(console, exc)
        return 1


def _run(
    args: argparse.Namespace,
    settings: Settings,
    console: Console,
    read_line: Optional[ReadLine],
    runner: Runner,
) -> int:
    if not (args.list and args.json):
        console.print("Looking for connected devices...")
    devices = discover_devices(settings, runner=runner)

    if args.list and args.json:
        print(devices_to_json(devices))
        return 0

    if not devices:
        console.print("No connected devices found.")
        return 0

    if args.list:
        console.print(f"\nFound {len(devices)} device(s):\n")
        console.print(format_device_table(devices), markup=False, highlight=False)
        return 0

    device_id = select_device(devices, console, read_line)
    console.print("Selected device identifier:")
    console.print(device_id, markup=False, highlight=False)

    console.print("Looking for running applications...")
    applications = discover_applications(device_id, settings, runner=runner)
    if not applications:
        console.print("No running applications found.")
        console.print("Start the app on the device first, then try again.")
        return 0

    app = select_application(applications, console, read_line)
    console.print(f"Bundle ID: {app.bundle_id}", markup=False, highlight=False)
    console.print(f"Path: {app.full_path or '-'}", markup=False, highlight=False)

    launch_app(device_id, app, console, dry_run=not args.launch, settings=settings, runner=runner)
    return 0


def _report_error(console: Console, error: MetalHudError) -> None:
    console.print(f"Error: {error}", style="bold red", markup=False, highlight=False)
    if error.details:
        console.print(error.details, style="red", markup=False, highlight=False)
    for hint in hints_for(error):
        console.print(f"  {hint}", style="yellow", markup=False, highlight=False)
    logger.debug("Run aborted", exc_info=error)


if __name__ == "__main__":
    raise SystemExit(main())
