"""
SVG handling for laser jobs.

Parses OpenSCAD SVG output, applies the Trotec cut/engrave styling and
merges both layers into a single document.
"""

from .document import (
    SVGDocument,
    SVG_NS,
    local_name,
)
from .styles import (
    LayerRole,
    LayerStyle,
    CUT_STYLE,
    ENGRAVE_STYLE,
    restyle,
)
from .merge import (
    merge,
    document_title,
)

__all__ = [
    # Document
    "SVGDocument",
    "SVG_NS",
    "local_name",
    # Styles
    "LayerRole",
    "LayerStyle",
    "CUT_STYLE",
    "ENGRAVE_STYLE",
    "restyle",
    # Merge
    "merge",
    "document_title",
]
