"""scad2trotec - OpenSCAD to Trotec laser job converter.

Renders the cut and engrave layers of a parametric OpenSCAD drawing,
merges them into one styled SVG and converts it to EPS/PDF with Inkscape.
"""

__version__ = "0.3.0"
