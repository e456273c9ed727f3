"""Locate the external OpenSCAD and Inkscape executables.

Each tool has one ordered candidate list per platform. An explicit
override (``TROTEC_OPENSCAD`` / ``TROTEC_INKSCAPE``) wins over probing.
Tools are resolved once at startup and passed down as ``ToolPaths``.
"""

import os
import shutil
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import Settings
from .exceptions import ToolNotFound
from .utils import get_logger

logger = get_logger("tools")


def current_platform() -> str:
    """Platform key used to pick a candidate list: windows, darwin or linux."""
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform == "darwin":
        return "darwin"
    return "linux"


@dataclass(frozen=True)
class ToolSpec:
    """An external executable and where it is usually installed."""
    name: str
    env_var: str
    candidates: Dict[str, List[str]] = field(default_factory=dict)

    def candidate_paths(self, platform: Optional[str] = None) -> List[str]:
        """Ordered search list for a platform, ending with the bare name (PATH lookup)."""
        platform = platform or current_platform()
        paths = list(self.candidates.get(platform, []))
        paths.append(self.name)
        return paths


OPENSCAD = ToolSpec(
    name="openscad",
    env_var="TROTEC_OPENSCAD",
    candidates={
        "windows": [
            r"C:\Program Files\OpenSCAD\openscad.exe",
            r"C:\Program Files (x86)\OpenSCAD\openscad.exe",
        ],
        "darwin": [
            "/Applications/OpenSCAD.app/Contents/MacOS/OpenSCAD",
            "/usr/local/bin/openscad",
            "/opt/homebrew/bin/openscad",
        ],
        "linux": [
            "/usr/bin/openscad",
            "/usr/local/bin/openscad",
            "/snap/bin/openscad",
        ],
    },
)

INKSCAPE = ToolSpec(
    name="inkscape",
    env_var="TROTEC_INKSCAPE",
    candidates={
        "windows": [
            r"C:\Program Files\Inkscape\bin\inkscape.exe",
            r"C:\Program Files (x86)\Inkscape\bin\inkscape.exe",
        ],
        "darwin": [
            "/Applications/Inkscape.app/Contents/MacOS/inkscape",
            "/usr/local/bin/inkscape",
            "/opt/homebrew/bin/inkscape",
        ],
        "linux": [
            "/usr/bin/inkscape",
            "/usr/local/bin/inkscape",
            "/snap/bin/inkscape",
        ],
    },
)


@dataclass(frozen=True)
class ToolPaths:
    """Resolved executables for one run."""
    openscad: str
    inkscape: str


def _is_executable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def _lookup(path: str) -> Optional[str]:
    """Check a path with a directory part directly; search PATH for a bare name."""
    if os.path.dirname(path) or os.path.isabs(path):
        return path if _is_executable(path) else None
    return shutil.which(path)


def find_tool(spec: ToolSpec, override: Optional[str] = None,
              platform: Optional[str] = None) -> str:
    """
    Find an executable.

    Args:
        spec: Tool to look for
        override: Explicit path; must exist when given
        platform: Platform key, detected when omitted

    Returns:
        Path to the executable

    Raises:
        ToolNotFound: if the override is missing or no candidate exists
    """
    if override:
        found = _lookup(override)
        if found:
            return found
        raise ToolNotFound(f"{spec.name} not found at {override} (from {spec.env_var})")

    searched = spec.candidate_paths(platform)
    for path in searched:
        found = _lookup(path)
        if found:
            return found

    raise ToolNotFound(
        f"{spec.name} not found; searched {', '.join(searched)}. "
        f"Set {spec.env_var} to its location."
    )


def resolve_tools(settings: Settings) -> ToolPaths:
    """Resolve both tools before any rendering starts."""
    tools = ToolPaths(
        openscad=find_tool(OPENSCAD, settings.openscad),
        inkscape=find_tool(INKSCAPE, settings.inkscape),
    )
    logger.debug(f"Using OpenSCAD: {tools.openscad}")
    logger.debug(f"Using Inkscape: {tools.inkscape}")
    return tools
