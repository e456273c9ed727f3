"""
OpenSCAD layer rendering.

Runs OpenSCAD headless with the layer variable overridden and reads the
SVG it writes to standard output.
"""

import subprocess
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional, Union

from .exceptions import RenderFailure
from .utils import get_logger

logger = get_logger("render")


def build_render_command(openscad: str, source: Union[str, Path], layer: int,
                         variable: str = "layer") -> List[str]:
    """Command line rendering one layer of ``source`` as SVG to stdout."""
    return [
        openscad,
        "-o", "-",
        "--export-format", "svg",
        "-D", f"{variable}={layer}",
        str(source),
    ]


def render_layer(openscad: str, source: Union[str, Path], layer: int,
                 variable: str = "layer",
                 timeout: Optional[float] = None) -> str:
    """
    Render one layer of an OpenSCAD file.

    Args:
        openscad: OpenSCAD executable
        source: .scad file
        layer: Value assigned to the layer variable
        variable: Name of the layer variable
        timeout: Seconds before the render is abandoned

    Returns:
        SVG text from OpenSCAD's standard output

    Raises:
        RenderFailure: on a non-zero exit, timeout, launch error, or empty
            or unparsable output
    """
    cmd = build_render_command(openscad, source, layer, variable)
    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise RenderFailure(
            f"OpenSCAD timed out after {timeout:.0f}s rendering {variable}={layer}"
        ) from e
    except OSError as e:
        raise RenderFailure(f"Could not run OpenSCAD ({openscad}): {e}") from e

    stderr = result.stderr.strip()
    if result.returncode != 0:
        raise RenderFailure(
            f"OpenSCAD exited with code {result.returncode} rendering {variable}={layer}"
            + (f": {stderr}" if stderr else "")
        )

    # OpenSCAD reports echo() output and warnings on stderr
    for line in stderr.splitlines():
        if line.startswith("WARNING"):
            logger.warning(f"OpenSCAD: {line}")
        else:
            logger.debug(f"OpenSCAD: {line}")

    if not result.stdout.strip():
        raise RenderFailure(f"OpenSCAD produced no SVG output for {variable}={layer}")

    try:
        ET.fromstring(result.stdout)
    except ET.ParseError as e:
        raise RenderFailure(
            f"OpenSCAD output for {variable}={layer} is not well-formed SVG ({e})"
        ) from e

    return result.stdout
