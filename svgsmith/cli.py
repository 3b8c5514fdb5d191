"""
SVGSmith CLI - Command-line interface for converting SVG files to GLB models
"""

import asyncio
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from svgsmith import __version__
from svgsmith.blender import BlenderLocator
from svgsmith.config import PipelineConfig
from svgsmith.host import StagingImporter
from svgsmith.pipeline import ConversionPipeline
from svgsmith.script import generate_conversion_script


class ClickNotifier:
    def notify(self, message: str, level: str = "error") -> None:
        click.secho(message, fg='red' if level == "error" else 'yellow', err=True)


class ClickIndicator:
    """Prints conversion progress to the terminal"""

    def __init__(self, label: str, verbose: bool = False):
        self.label = label
        self.verbose = verbose

    def update(self, fraction: float, primary_text: str, secondary_text: str = "") -> None:
        if self.verbose:
            click.secho(f"  [{self.label}] {primary_text}", dim=True)

    def complete(self, final_text: str) -> None:
        click.echo(f"  [{self.label}] {final_text}")

    def remove(self) -> None:
        pass


class ClickIndicatorFactory:
    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def create(self, label: str) -> ClickIndicator:
        return ClickIndicator(label, self.verbose)


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    SVGSmith - Convert SVG files into GLB models using Blender.

    Examples:
        svgsmith convert logo.svg icons/*.svg -o models/
        svgsmith doctor
    """
    pass


@cli.command()
@click.argument('files', nargs=-1, required=True)
@click.option('-o', '--output', required=True, help='Directory converted .glb files are written to')
@click.option('--blender', default=None, help='Blender executable (default: BLENDER_PATH or auto-detect)')
@click.option('--cache-dir', default=None, help='Staging directory for Blender output')
@click.option('--row-size', default=10, show_default=True, help='Models per row of the placement grid')
@click.option('--spacing', default=1.0, show_default=True, help='Distance between grid cells')
@click.option('--timeout', type=float, default=None, help='Kill Blender after this many seconds')
@click.option('--skip-dialogue', is_flag=True, help='Import without a confirmation dialogue')
@click.option('--verbose', '-v', is_flag=True, help='Stream Blender output and debug logs')
def convert(files, output, blender, cache_dir, row_size, spacing, timeout, skip_dialogue, verbose):
    """
    Convert SVG files to GLB models.

    Non-SVG files are listed and left alone. SVG files whose names contain
    characters outside Latin-1 are skipped.

    Examples:
        svgsmith convert logo.svg -o models/
        svgsmith convert a.svg b.svg --blender /opt/blender/blender -o out/ -v
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        for path in files:
            if not Path(path).exists():
                raise FileNotFoundError(f"Input file not found: {path}")

        config = PipelineConfig.from_env(
            blender_path=blender,
            cache_dir=cache_dir,
            row_size=row_size,
            grid_spacing=spacing,
            process_timeout=timeout,
            skip_import_dialogue=skip_dialogue,
        )
        importer = StagingImporter(output)
        pipeline = ConversionPipeline(
            config,
            importer=importer,
            notifier=ClickNotifier(),
            indicators=ClickIndicatorFactory(verbose),
        )

        click.echo(f"Converting {len(files)} file(s) into {output}")
        result = asyncio.run(pipeline.process_and_wait(files))

        if not result.tool_available:
            sys.exit(1)

        for path in result.passthrough:
            click.secho(f"Skipped (not an SVG): {path}", fg='yellow')
        for path, reason in result.rejected:
            click.secho(f"Skipped ({reason.replace('_', ' ')}): {path}", fg='yellow')
        for record in importer.records:
            click.secho(f"✓ {record.path} at {record.position.to_list()}", fg='green')
        for job in result.failed:
            click.secho(f"✗ {job.source}: {job.error}", fg='red', err=True)

        if result.failed:
            sys.exit(1)
        click.secho(f"✓ Success! Converted {len(result.succeeded)} file(s)", fg='green')

    except FileNotFoundError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except ValidationError as e:
        click.secho(f"Invalid option: {e}", fg='red', err=True)
        sys.exit(1)


@cli.command()
@click.argument('input_path')
@click.argument('output_path')
def script(input_path, output_path):
    """
    Print the Blender script used to convert INPUT_PATH to OUTPUT_PATH.

    Example:
        svgsmith script logo.svg logo.glb > convert_logo.py
    """
    try:
        click.echo(generate_conversion_script(input_path, output_path), nl=False)
    except ValueError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)


@cli.command()
@click.option('--blender', default=None, help='Blender executable to check')
def doctor(blender):
    """Check whether Blender can be found."""
    info = BlenderLocator(blender, read_version=True).locate()
    if not info.available:
        click.secho("✗ Blender not found. Install it or set BLENDER_PATH.", fg='red', err=True)
        sys.exit(1)
    click.secho(f"✓ Blender found: {info.executable}", fg='green')
    if info.version:
        click.echo(f"  {info.version}")


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
