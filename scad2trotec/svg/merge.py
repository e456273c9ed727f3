"""
Cut/engrave layer merge.

Takes the two SVG documents OpenSCAD renders for one source file and
produces the combined document the Trotec driver expects: the cut path
as a red hairline, the engrave path as a black fill, both under one root
titled after the source.
"""

from pathlib import Path
from typing import Union

from .document import SVGDocument
from .styles import CUT_STYLE, ENGRAVE_STYLE, restyle
from ..utils import get_logger

logger = get_logger("svg.merge")


def document_title(source: Union[str, Path]) -> str:
    """Title for the combined document: the source file name without extension."""
    return Path(source).stem


def merge(cut_svg: str, engrave_svg: str, title: str) -> str:
    """
    Merge a cut layer and an engrave layer into one styled SVG.

    The cut document is reused as the combined document. The engrave
    path is restyled, deep-copied into it after the cut path, and the
    rest of the engrave document (title included) is dropped.

    Args:
        cut_svg: SVG text rendered for the cut layer
        engrave_svg: SVG text rendered for the engrave layer
        title: Source base name to use as the document title

    Returns:
        Combined SVG text

    Raises:
        MergeStructureViolation: if either input is malformed, lacks a
            title, or does not hold exactly one top-level path
    """
    cut_doc = SVGDocument.from_string(cut_svg, label="cut document")
    engrave_doc = SVGDocument.from_string(engrave_svg, label="engrave document")

    # Check both documents before mutating either
    cut_title = cut_doc.title_element()
    engrave_doc.title_element()
    cut_path = cut_doc.single_drawable_path()
    engrave_path = engrave_doc.single_drawable_path()

    cut_title.text = title
    restyle(cut_path, CUT_STYLE)
    restyle(engrave_path, ENGRAVE_STYLE)
    cut_doc.import_node(engrave_path)

    logger.debug(f"Merged layers into '{title}' ({len(cut_doc.drawable_paths())} paths)")
    return cut_doc.to_string()
