"""Records describing devices and running applications reported by devicectl."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class DeviceInfo:
    identifier: str
    name: Optional[str] = None
    platform: Optional[str] = None
    connection_type: Optional[str] = None
    state: Optional[str] = None
    model: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name or "Unknown device"


@dataclass
class ApplicationInfo:
    bundle_id: str
    display_name: Optional[str] = None
    pid: Optional[str] = None
    full_path: Optional[str] = None

    @property
    def label(self) -> str:
        return self.display_name or self.bundle_id
