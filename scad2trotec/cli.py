"""Command line entry point for scad2trotec."""

import sys
from pathlib import Path

import click
from rich.markup import escape

from scad2trotec import __version__
from scad2trotec.config import get_settings
from scad2trotec.exceptions import LaserPipelineError
from scad2trotec.pipeline import run_pipeline
from scad2trotec.utils import console, setup_logging


@click.command()
@click.version_option(version=__version__, prog_name="scad2trotec")
@click.argument(
    "source",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def cli(source: Path) -> None:
    """Convert an OpenSCAD drawing into a Trotec laser job.

    Renders the cut (layer=1) and engrave (layer=2) geometry of SOURCE,
    merges them into SOURCE_trotec.svg and exports SOURCE_trotec.eps
    next to it.

    Example: scad2trotec panel.scad
    """
    settings = get_settings()
    setup_logging(settings.log_level)

    console.print(f"[bold]Laser job: {escape(source.name)}[/bold]")

    try:
        result = run_pipeline(source, settings=settings)
    except LaserPipelineError as e:
        console.print(f"[red]Failed at {e.stage} stage: {escape(str(e))}[/red]")
        sys.exit(1)

    console.print(f"[green]Combined SVG: {escape(str(result.svg_path))}[/green]")
    console.print(f"[green]Laser file: {escape(str(result.output_path))}[/green]")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
