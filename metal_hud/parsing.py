"""Turn the human-readable output of devicectl into device and application records.

devicectl has printed devices in two shapes across Xcode releases:

* a table with ``Name``, ``Identifier``, ``State`` and ``Model`` columns, and
* an older block format with one ``Label: value`` pair per line.

Both are handled here, along with the process listing used to find running
apps. Nothing in this module performs I/O or raises on a malformed line; such
lines are skipped.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Tuple

from .models import ApplicationInfo, DeviceInfo

TABLE_COLUMNS = ("Name", "Identifier", "State", "Model")

# Shorter identifiers are treated as stray text rather than a device row.
MIN_IDENTIFIER_LENGTH = 11

PLATFORM_KEYWORDS: Sequence[Tuple[str, str]] = (
    ("iPhone", "iOS"),
    ("iPad", "iPadOS"),
    ("Watch", "watchOS"),
    ("Apple TV", "tvOS"),
    ("Mac", "macOS"),
)
UNKNOWN_PLATFORM = "Unknown"

_LEGACY_FIELDS: Sequence[Tuple[str, "re.Pattern[str]"]] = (
    ("name", re.compile(r"Name:\s*(\S.*)", re.IGNORECASE)),
    ("platform", re.compile(r"Platform:\s*(\S.*)", re.IGNORECASE)),
    ("connection_type", re.compile(r"Connection Type:\s*(\S.*)", re.IGNORECASE)),
)
_LEGACY_IDENTIFIER = re.compile(r"Identifier:\s*(\S.*)", re.IGNORECASE)

_SEPARATOR_ROW = re.compile(r"^[\s\-]+$")

_BUNDLE_PATH = re.compile(r"Bundle/Application/([^/]+)/([^/]+\.app)")
_FULL_PATH = re.compile(r"(/private/var/containers/Bundle/Application/[^/]+/[^/]+\.app)")
_LEADING_PID = re.compile(r"^\s*(\d+)")


def platform_from_model(model: str) -> str:
    for keyword, platform in PLATFORM_KEYWORDS:
        if keyword in model:
            return platform
    return UNKNOWN_PLATFORM


def parse_device_output(output: str) -> List[DeviceInfo]:
    """Parse ``devicectl list devices`` output in either supported shape."""
    lines = output.splitlines()
    header = _find_table_header(lines)
    if header is None:
        return parse_legacy_device_output(output)

    header_index, columns = header
    devices: List[DeviceInfo] = []
    for line in lines[header_index + 1 :]:
        if not line.strip() or _SEPARATOR_ROW.match(line):
            continue
        fields = _slice_columns(line, columns)
        identifier = fields["Identifier"]
        if len(identifier) < MIN_IDENTIFIER_LENGTH:
            continue
        state = fields["State"]
        model = fields["Model"]
        devices.append(
            DeviceInfo(
                identifier=identifier,
                name=fields["Name"] or None,
                platform=platform_from_model(model),
                connection_type="paired" if "paired" in state else "available",
                state=state or None,
                model=model or None,
            )
        )
    return devices


def parse_legacy_device_output(output: str) -> List[DeviceInfo]:
    """Parse the older ``Identifier: ...`` block format."""
    devices: List[DeviceInfo] = []
    current: Optional[DeviceInfo] = None

    for raw_line in output.splitlines():
        line = raw_line.strip()

        identifier_match = _LEGACY_IDENTIFIER.search(line)
        if identifier_match:
            if current is not None:
                devices.append(current)
            current = DeviceInfo(identifier=identifier_match.group(1).strip())
            continue

        if current is None:
            continue
        for attribute, pattern in _LEGACY_FIELDS:
            match = pattern.search(line)
            if match:
                setattr(current, attribute, match.group(1).strip())
                break

    if current is not None:
        devices.append(current)
    return devices


def parse_application_output(output: str) -> List[ApplicationInfo]:
    """Extract one record per app bundle from a process listing.

    An app can own several processes; only the first line seen for a bundle
    is kept.
    """
    applications: Dict[str, ApplicationInfo] = {}

    for raw_line in output.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        bundle_match = _BUNDLE_PATH.search(line)
        if not bundle_match:
            continue
        bundle_id, app_name = bundle_match.groups()
        if bundle_id in applications:
            continue

        path_match = _FULL_PATH.search(line)
        pid_match = _LEADING_PID.match(line)
        applications[bundle_id] = ApplicationInfo(
            bundle_id=bundle_id,
            display_name=app_name,
            pid=pid_match.group(1) if pid_match else None,
            full_path=path_match.group(1) if path_match else None,
        )

    return list(applications.values())


def _find_table_header(lines: Sequence[str]) -> Optional[Tuple[int, Dict[str, Tuple[int, Optional[int]]]]]:
    for index, line in enumerate(lines):
        if not all(column in line for column in TABLE_COLUMNS):
            continue
        starts = sorted((line.index(column), column) for column in TABLE_COLUMNS)
        columns: Dict[str, Tuple[int, Optional[int]]] = {}
        for position, (start, column) in enumerate(starts):
            end = starts[position + 1][0] if position + 1 < len(starts) else None
            columns[column] = (start, end)
        return index, columns
    return None


def _slice_columns(line: str, columns: Dict[str, Tuple[int, Optional[int]]]) -> Dict[str, str]:
    return {column: line[start:end].strip() for column, (start, end) in columns.items()}
