"""
SVGSmith - Convert SVG vector graphics into GLB mesh assets with Blender

Runs Blender headlessly for each SVG in an import batch, streams its output
as progress, stages the resulting models and hands them to an importer.
"""

__version__ = "0.1.0"

from svgsmith.config import PipelineConfig
from svgsmith.layout import GridLayoutCursor, Placement, Quat, Vec3
from svgsmith.models import BatchResult, ConversionJob, JobState, ProgressEvent
from svgsmith.pipeline import ConversionPipeline
from svgsmith.registry import ImportHandlerRegistry, install
from svgsmith.runner import ProcessRunner
from svgsmith.script import generate_conversion_script

__all__ = [
    "PipelineConfig",
    "GridLayoutCursor",
    "Placement",
    "Quat",
    "Vec3",
    "BatchResult",
    "ConversionJob",
    "JobState",
    "ProgressEvent",
    "ConversionPipeline",
    "ImportHandlerRegistry",
    "install",
    "ProcessRunner",
    "generate_conversion_script",
]
