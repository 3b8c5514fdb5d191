"""
Blender discovery

Finds the Blender executable once per batch so the pipeline can fail fast
before spawning anything.
"""

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from .exceptions import ToolUnavailableError

logger = logging.getLogger(__name__)

# Checked in order after an explicit path and BLENDER_PATH
COMMON_PATHS = [
    "/Applications/Blender.app/Contents/MacOS/Blender",  # macOS
    "/usr/bin/blender",  # Linux
    "/usr/local/bin/blender",  # Linux
    "/snap/bin/blender",  # Linux (snap)
    r"C:\Program Files\Blender Foundation\Blender\blender.exe",  # Windows
]


@dataclass(frozen=True)
class ToolInfo:
    """Availability of the external conversion tool"""
    available: bool
    executable: Optional[str] = None
    version: Optional[str] = None


def is_executable(path: Optional[str]) -> bool:
    return bool(path) and os.path.isfile(path) and os.access(path, os.X_OK)


class BlenderLocator:
    """
    Locates Blender.

    Search order: explicit path, BLENDER_PATH, common install locations,
    then ``blender`` on PATH. An explicit path that is not executable makes
    Blender unavailable rather than falling back to a search.
    """

    def __init__(self, explicit_path: Optional[str] = None, read_version: bool = False):
        self.explicit_path = explicit_path
        self.read_version = read_version

    def candidates(self) -> List[str]:
        if self.explicit_path:
            return [self.explicit_path]
        paths = []
        env_path = os.getenv("BLENDER_PATH")
        if env_path:
            paths.append(env_path)
        paths.extend(COMMON_PATHS)
        which_path = shutil.which("blender")
        if which_path:
            paths.append(which_path)
        return paths

    def find(self) -> Optional[str]:
        for path in self.candidates():
            resolved = path if os.path.isabs(path) else shutil.which(path)
            if is_executable(resolved):
                return resolved
        return None

    def locate(self) -> ToolInfo:
        """Return availability without raising"""
        executable = self.find()
        if executable is None:
            logger.debug("Blender not found (searched: %s)", ", ".join(self.candidates()))
            return ToolInfo(available=False)
        version = self._version(executable) if self.read_version else None
        logger.debug(f"Found Blender at {executable}")
        return ToolInfo(available=True, executable=executable, version=version)

    def require(self) -> str:
        """
        Return the Blender executable.

        Raises:
            ToolUnavailableError: If Blender cannot be found
        """
        info = self.locate()
        if not info.available:
            raise ToolUnavailableError(
                "Blender not found. Please install Blender to convert SVG files.\n"
                "Install from: https://www.blender.org/download/\n"
                "Or set BLENDER_PATH environment variable."
            )
        return info.executable

    @staticmethod
    def _version(executable: str) -> Optional[str]:
        try:
            result = subprocess.run([executable, "--version"], capture_output=True, text=True, timeout=30)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning(f"Could not query Blender version: {e}")
            return None
        if result.returncode != 0:
            return None
        first_line = result.stdout.strip().splitlines()[:1]
        return first_line[0] if first_line else None
