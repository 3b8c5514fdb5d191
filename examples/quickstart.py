"""
SVGSmith Quick Start Example

Converts every SVG in ./svgs into a GLB under ./output, laying the models out
on a grid. Requires Blender (set BLENDER_PATH if it is not on PATH).
"""

import asyncio
import glob
import logging

from svgsmith import ConversionPipeline, PipelineConfig
from svgsmith.host import StagingImporter

logging.basicConfig(level=logging.INFO)

pipeline = ConversionPipeline(
    PipelineConfig.from_env(row_size=5, grid_spacing=2.0),
    importer=StagingImporter("output"),
)

print("Converting SVGs...")
result = asyncio.run(pipeline.process_and_wait(sorted(glob.glob("svgs/*"))))

for record in pipeline.importer.records:
    print(f"✅ {record.path} at {record.position.to_list()}")
for job in result.failed:
    print(f"❌ {job.source}: {job.error}")
for path in result.passthrough:
    print(f"Skipped {path} (not an SVG)")
