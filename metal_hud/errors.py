"""Error hierarchy for metal-hud and the user hints attached to known failures."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .devicectl import CommandResult


class MetalHudError(Exception):
    """Base class for every failure that ends a run."""

    def __init__(self, message: str, result: Optional["CommandResult"] = None) -> None:
        super().__init__(message)
        self.result = result

    @property
    def details(self) -> str:
        return self.result.message if self.result is not None else ""


class ToolNotFoundError(MetalHudError):
    """xcrun or devicectl could not be executed."""


class DiscoveryError(MetalHudError):
    """Listing devices or processes failed."""


class SelectionError(MetalHudError):
    """The menu had nothing to offer or the answer was not a valid choice."""


class MissingPathError(MetalHudError):
    """The selected application has no installed path to launch."""


class LaunchError(MetalHudError):
    """devicectl refused or failed to launch the application."""


def hints_for(error: MetalHudError) -> List[str]:
    """Return remediation tips for an error, matched on the tool's own output."""
    if isinstance(error, ToolNotFoundError):
        return [
            "Make sure the Xcode Command Line Tools are installed.",
            "Install them with: xcode-select --install",
        ]
    if isinstance(error, LaunchError):
        text = f"{error} {error.details}"
        if "not found" in text:
            return ["Check that the app is installed on the device."]
        if "permission" in text:
            return ["Check that Developer Mode is enabled on the device."]
    if isinstance(error, MissingPathError):
        return ["devicectl did not report an installed path under /private/var/containers."]
    return []
