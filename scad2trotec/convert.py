"""
Inkscape page export.

Converts the combined SVG into the page-description file the Trotec
print driver opens, cropped to the drawing.
"""

import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Union

from .exceptions import ConversionFailure
from .utils import get_logger

logger = get_logger("convert")

# Format-specific version options
PAGE_FORMAT_OPTIONS: Dict[str, List[str]] = {
    "eps": ["--export-ps-level=3"],
    "pdf": ["--export-pdf-version=1.5"],
}


def build_convert_command(inkscape: str, svg_path: Union[str, Path],
                          output_path: Union[str, Path],
                          page_format: str = "eps",
                          margin: float = 0) -> List[str]:
    """Inkscape command line exporting ``svg_path`` to ``output_path``."""
    if page_format not in PAGE_FORMAT_OPTIONS:
        raise ValueError(f"Unsupported page format: {page_format}")

    return [
        inkscape,
        str(svg_path),
        "--export-area-drawing",
        *PAGE_FORMAT_OPTIONS[page_format],
        f"--export-margin={margin:g}",
        f"--export-type={page_format}",
        f"--export-filename={output_path}",
    ]


def convert_to_page(inkscape: str, svg_path: Union[str, Path],
                    output_path: Union[str, Path],
                    page_format: str = "eps",
                    margin: float = 0,
                    timeout: Optional[float] = None) -> Path:
    """
    Convert an SVG file with Inkscape.

    Args:
        inkscape: Inkscape executable
        svg_path: Combined SVG file
        output_path: File to create
        page_format: 'eps' or 'pdf'
        margin: Margin around the drawing
        timeout: Seconds before the export is abandoned

    Returns:
        Path of the written file

    Raises:
        ConversionFailure: on a non-zero exit, timeout, launch error or
            missing output file
    """
    output_path = Path(output_path)
    cmd = build_convert_command(inkscape, svg_path, output_path, page_format, margin)
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
        raise ConversionFailure(f"Inkscape timed out after {timeout:.0f}s") from e
    except OSError as e:
        raise ConversionFailure(f"Could not run Inkscape ({inkscape}): {e}") from e

    stderr = result.stderr.strip()
    if result.returncode != 0:
        raise ConversionFailure(
            f"Inkscape exited with code {result.returncode}"
            + (f": {stderr}" if stderr else "")
        )

    if stderr:
        logger.debug(f"Inkscape: {stderr}")

    if not output_path.exists():
        raise ConversionFailure(f"Inkscape reported success but {output_path} was not written")

    return output_path
