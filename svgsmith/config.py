"""
Pipeline configuration

All knobs are passed explicitly to the pipeline; nothing is read from global
state after construction.
"""

import os
import tempfile
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CACHE_DIR = os.path.join(tempfile.gettempdir(), "svgsmith", "Cache")


class PipelineConfig(BaseModel):
    """Settings for one ConversionPipeline"""
    model_config = ConfigDict(extra='forbid')

    enabled: bool = Field(True, description="When False every batch is passed through untouched.")
    skip_import_dialogue: bool = Field(False, description="Forwarded to the import hand-off.")
    cache_dir: str = Field(DEFAULT_CACHE_DIR, description="Directory converted GLB files are staged in.")
    script_dir: Optional[str] = Field(None, description="Directory for temporary Blender scripts (system temp if None).")
    blender_path: Optional[str] = Field(None, description="Explicit Blender executable; searched for if None.")
    row_size: int = Field(10, gt=0, description="Assets per grid row.")
    grid_spacing: float = Field(1.0, gt=0, description="Distance between grid cells.")
    indicator_linger_seconds: float = Field(2.5, ge=0, description="Delay before a finished progress indicator is removed.")
    output_extension: str = Field("glb", description="Extension of staged output files.")
    process_timeout: Optional[float] = Field(None, gt=0, description="Kill Blender after this many seconds.")

    @field_validator('output_extension')
    @classmethod
    def _strip_dot(cls, v: str) -> str:
        v = v.lstrip('.').lower()
        if not v:
            raise ValueError("output_extension must not be empty")
        return v

    @classmethod
    def from_env(cls, **overrides) -> "PipelineConfig":
        """
        Build a config from environment variables.

        Reads BLENDER_PATH and SVGSMITH_CACHE_DIR. Keyword overrides win over
        the environment.
        """
        values = {}
        if os.getenv("BLENDER_PATH"):
            values["blender_path"] = os.getenv("BLENDER_PATH")
        if os.getenv("SVGSMITH_CACHE_DIR"):
            values["cache_dir"] = os.getenv("SVGSMITH_CACHE_DIR")
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def destination_for(self, source_path: str) -> str:
        """Staged output path for a source file: cache dir + file name + extension"""
        file_name = os.path.basename(source_path.replace("\\", "/"))
        return os.path.join(self.cache_dir, f"{file_name}.{self.output_extension}").replace("\\", "/")
