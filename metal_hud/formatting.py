"""Console-friendly formatting utilities."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Iterable, List, Sequence

from .models import ApplicationInfo, DeviceInfo


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = [len(h) for h in headers]
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))
    lines = []
    lines.append(_format_row(headers, widths))
    lines.append(_format_row(["-" * w for w in widths], widths))
    for row in rows:
        lines.append(_format_row(row, widths))
    return "\n".join(lines)


def format_device_table(devices: Iterable[DeviceInfo]) -> str:
    rows = [
        [
            str(index),
            device.label,
            device.identifier,
            device.platform or "-",
            device.connection_type or "-",
        ]
        for index, device in enumerate(devices, start=1)
    ]
    return render_table(["#", "Name", "Identifier", "Platform", "Connection"], rows) if rows else "No devices"


def format_device_entry(index: int, device: DeviceInfo) -> List[str]:
    lines = [f"{index}. {device.label}", f"   Identifier: {device.identifier}"]
    if device.platform:
        lines.append(f"   Platform: {device.platform}")
    if device.connection_type:
        lines.append(f"   Connection: {device.connection_type}")
    return lines


def format_application_entry(index: int, app: ApplicationInfo) -> List[str]:
    lines = [f"{index}. {app.label}", f"   Bundle ID: {app.bundle_id}"]
    if app.pid:
        lines.append(f"   PID: {app.pid}")
    return lines


def devices_to_json(devices: Sequence[DeviceInfo]) -> str:
    return json.dumps({"devices": [asdict(device) for device in devices]}, ensure_ascii=False, indent=2)


def _format_row(row: Sequence[str], widths: Sequence[int]) -> str:
    padded = [cell.ljust(width) for cell, width in zip(row, widths)]
    return " | ".join(padded)
