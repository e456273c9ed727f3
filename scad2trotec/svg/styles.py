"""
Layer styling for Trotec laser jobs.

The Trotec driver maps colors to laser operations: a hairline red stroke
is a vector cut, a solid black fill is raster engraving. The values below
must match the driver exactly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional
from xml.etree.ElementTree import Element


class LayerRole(str, Enum):
    """Laser operation of a rendered layer."""
    CUT = "cut"
    ENGRAVE = "engrave"


@dataclass(frozen=True)
class LayerStyle:
    """Presentation attributes forced onto a layer's path."""
    role: LayerRole
    element_id: str
    stroke: str
    fill: str
    stroke_width: Optional[str] = None  # None removes the attribute

    @property
    def attributes(self) -> Dict[str, Optional[str]]:
        """Attribute name to value; ``None`` marks an attribute to delete."""
        return {
            "id": self.element_id,
            "stroke": self.stroke,
            "stroke-width": self.stroke_width,
            "fill": self.fill,
        }


CUT_STYLE = LayerStyle(
    role=LayerRole.CUT,
    element_id="cut_path",
    stroke="red",
    stroke_width="0.01",
    fill="none",
)

ENGRAVE_STYLE = LayerStyle(
    role=LayerRole.ENGRAVE,
    element_id="engrave_path",
    stroke="none",
    fill="black",
)


def restyle(element: Element, style: LayerStyle) -> Element:
    """
    Overwrite the identity and presentation attributes of a path.

    Values are assigned, never toggled, so applying the same style again
    leaves the element unchanged. Attributes mapped to ``None`` are removed.

    Args:
        element: Path element to modify in place
        style: Style to apply

    Returns:
        The same element, for chaining
    """
    for name, value in style.attributes.items():
        if value is None:
            element.attrib.pop(name, None)
        else:
            element.set(name, value)
    return element
