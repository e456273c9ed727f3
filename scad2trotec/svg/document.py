"""
SVG document model used by the layer merge.

Wraps an ElementTree tree with accessors that check the shape OpenSCAD
produces: an ``<svg>`` root holding a ``<title>`` and exactly one
top-level ``<path>`` with the unioned geometry of the layer.
"""

import copy
import xml.etree.ElementTree as ET
from typing import List

from ..exceptions import MergeStructureViolation

SVG_NS = "http://www.w3.org/2000/svg"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` part of an ElementTree tag."""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _qualify(root: ET.Element) -> None:
    """Put un-namespaced elements into the SVG namespace."""
    for elem in root.iter():
        if isinstance(elem.tag, str) and not elem.tag.startswith("{"):
            elem.tag = f"{{{SVG_NS}}}{elem.tag}"


class SVGDocument:
    """
    One parsed SVG document.

    Usage:
        doc = SVGDocument.from_string(svg_text)
        doc.title_element().text = "widget"
        path = doc.single_drawable_path()
        text = doc.to_string()
    """

    def __init__(self, root: ET.Element, label: str = "document"):
        """
        Args:
            root: Root ``<svg>`` element
            label: Name used in error messages (e.g. ``"cut document"``)
        """
        if local_name(root.tag) != "svg":
            raise MergeStructureViolation(
                f"{label}: root element is <{local_name(root.tag)}>, expected <svg>"
            )
        _qualify(root)
        self.root = root
        self.label = label

    @classmethod
    def from_string(cls, text: str, label: str = "document") -> "SVGDocument":
        """Parse SVG text; malformed input raises MergeStructureViolation."""
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise MergeStructureViolation(f"{label}: not well-formed SVG ({e})") from e
        return cls(root, label=label)

    def _children(self, name: str) -> List[ET.Element]:
        return [child for child in self.root if local_name(child.tag) == name]

    def drawable_paths(self) -> List[ET.Element]:
        """All ``<path>`` elements directly under the root."""
        return self._children("path")

    def title_element(self) -> ET.Element:
        """Return the root's first ``<title>`` child."""
        titles = self._children("title")
        if not titles:
            raise MergeStructureViolation(f"{self.label}: no <title> element under the root")
        return titles[0]

    @property
    def title(self) -> str:
        return self.title_element().text or ""

    @title.setter
    def title(self, value: str) -> None:
        self.title_element().text = value

    def single_drawable_path(self) -> ET.Element:
        """
        Return the one top-level ``<path>``.

        The renderer is expected to union a layer into a single path.
        Zero or several paths cannot be disambiguated and are rejected.
        """
        paths = self.drawable_paths()
        if len(paths) != 1:
            raise MergeStructureViolation(
                f"{self.label}: expected exactly one top-level <path>, found {len(paths)}"
            )
        return paths[0]

    def import_node(self, node: ET.Element) -> ET.Element:
        """
        Deep-copy a node from another document and append it to the root.

        The copy shares nothing with the source tree, so the source
        document can be discarded afterwards.

        Returns:
            The appended copy
        """
        clone = copy.deepcopy(node)
        _qualify(clone)
        self.root.append(clone)
        return clone

    def to_string(self) -> str:
        """Serialize with an XML declaration and SVG as the default namespace."""
        return XML_DECLARATION + ET.tostring(
            self.root, encoding="unicode", default_namespace=SVG_NS
        )
