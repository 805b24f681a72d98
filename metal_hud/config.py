"""Constants and environment overrides for talking to devicectl."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

XCRUN_ENV = "METAL_HUD_XCRUN"

HUD_ENV_VAR = "MTL_HUD_ENABLED"
HUD_ENABLED_VALUE = "1"

# Running apps live under /private/var/containers/Bundle/Application/<uuid>/<name>.app
BUNDLE_PATH_MARKER = "Bundle/Application"
NO_MATCHING_PROCESSES = "no matching processes"


@dataclass(frozen=True)
class Settings:
    xcrun: str = "xcrun"
    hud_env_var: str = HUD_ENV_VAR
    hud_value: str = HUD_ENABLED_VALUE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        environ = os.environ if environ is None else environ
        xcrun = environ.get(XCRUN_ENV, "").strip()
        return cls(xcrun=xcrun or cls.xcrun)
