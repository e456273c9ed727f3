"""
Laser job pipeline.

Runs the whole conversion for one OpenSCAD source:
1. Locate OpenSCAD and Inkscape
2. Render the cut layer
3. Render the engrave layer
4. Merge both layers into one styled SVG
5. Write ``<name>_trotec.svg`` next to the source
6. Convert it to ``<name>_trotec.eps`` (or .pdf) with Inkscape

Stages run strictly in order and the first failure stops the run.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from .config import Settings, get_settings
from .convert import convert_to_page
from .exceptions import RenderFailure
from .render import render_layer
from .svg import document_title, merge
from .tools import ToolPaths, resolve_tools
from .utils import format_duration, get_logger

logger = get_logger("pipeline")


class PipelineStage(Enum):
    """Stages of a conversion run."""
    LOCATE = "locate"
    RENDER_CUT = "render_cut"
    RENDER_ENGRAVE = "render_engrave"
    MERGE = "merge"
    WRITE = "write"
    CONVERT = "convert"


@dataclass
class PipelineResult:
    """Outcome of a successful run."""
    source: Path
    title: str
    svg_path: Path
    output_path: Path
    duration_seconds: float = 0.0
    stages: List[str] = field(default_factory=list)


def output_paths(source: Union[str, Path],
                 settings: Optional[Settings] = None) -> Tuple[Path, Path]:
    """
    Artifact paths for a source file.

    Returns:
        (combined SVG path, page-format path), both beside the source
    """
    settings = settings or get_settings()
    source = Path(source)
    stem = f"{document_title(source)}{settings.output_suffix}"
    return (
        source.with_name(f"{stem}.svg"),
        source.with_name(f"{stem}.{settings.page_format}"),
    )


def run_pipeline(
    source: Union[str, Path],
    settings: Optional[Settings] = None,
    tools: Optional[ToolPaths] = None,
    progress_callback: Optional[Callable[[PipelineStage, str], None]] = None,
) -> PipelineResult:
    """
    Convert an OpenSCAD file into a Trotec-ready page file.

    Args:
        source: .scad file
        settings: Settings to use, global settings when omitted
        tools: Pre-resolved executables, located from settings when omitted
        progress_callback: Called with each stage before it starts

    Returns:
        PipelineResult with the written paths

    Raises:
        LaserPipelineError: subclass identifying the failed stage
    """
    settings = settings or get_settings()
    source = Path(source)
    started = time.monotonic()
    stages: List[str] = []

    def _stage(stage: PipelineStage, message: str) -> None:
        logger.info(message)
        stages.append(message)
        if progress_callback:
            progress_callback(stage, message)

    if not source.is_file():
        raise RenderFailure(f"Source file not found: {source}")

    if tools is None:
        _stage(PipelineStage.LOCATE, "Locating OpenSCAD and Inkscape")
        tools = resolve_tools(settings)

    title = document_title(source)
    svg_path, output_path = output_paths(source, settings)

    _stage(PipelineStage.RENDER_CUT,
           f"Rendering cut layer ({settings.layer_variable}={settings.cut_layer})")
    cut_svg = render_layer(
        tools.openscad, source, settings.cut_layer,
        variable=settings.layer_variable,
        timeout=settings.render_timeout,
    )

    _stage(PipelineStage.RENDER_ENGRAVE,
           f"Rendering engrave layer ({settings.layer_variable}={settings.engrave_layer})")
    engrave_svg = render_layer(
        tools.openscad, source, settings.engrave_layer,
        variable=settings.layer_variable,
        timeout=settings.render_timeout,
    )

    _stage(PipelineStage.MERGE, f"Merging layers as '{title}'")
    combined = merge(cut_svg, engrave_svg, title)

    _stage(PipelineStage.WRITE, f"Writing {svg_path.name}")
    svg_path.write_text(combined, encoding="utf-8")

    _stage(PipelineStage.CONVERT, f"Converting to {output_path.name}")
    convert_to_page(
        tools.inkscape, svg_path, output_path,
        page_format=settings.page_format,
        margin=settings.export_margin,
        timeout=settings.convert_timeout,
    )

    duration = time.monotonic() - started
    logger.info(f"Finished {output_path.name} in {format_duration(duration)}")

    return PipelineResult(
        source=source,
        title=title,
        svg_path=svg_path,
        output_path=output_path,
        duration_seconds=duration,
        stages=stages,
    )
