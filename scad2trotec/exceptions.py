"""Pipeline errors.

Every stage of the conversion is a hard precondition for the next one,
so each failure type halts the run. ``stage`` names the step that failed
and is what the command line reports.
"""


class LaserPipelineError(Exception):
    """Base class for all conversion failures."""

    stage = "pipeline"


class ToolNotFound(LaserPipelineError):
    """Raised when an external executable cannot be located."""

    stage = "locate"


class RenderFailure(LaserPipelineError):
    """Raised when OpenSCAD exits abnormally or produces no SVG."""

    stage = "render"


class MergeStructureViolation(LaserPipelineError):
    """Raised when a rendered SVG lacks the title or single-path structure."""

    stage = "merge"


class ConversionFailure(LaserPipelineError):
    """Raised when the Inkscape export fails or leaves no output file."""

    stage = "convert"
