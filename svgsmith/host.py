"""
Host collaborators

The pipeline talks to its host through four narrow interfaces: the generic
import entry point, a user notification channel, a progress indicator
factory and the Blender locator (see blender.py). Headless implementations
used by the CLI and tests live here as well.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Protocol, Sequence

from .layout import Quat, Vec3
from .progress import LoggingReporter, ProgressReporter

logger = logging.getLogger(__name__)


class AssetClass(str, Enum):
    MODEL = "model"


class ImportHandoff(Protocol):
    """The host's generic import entry point"""

    def import_assets(
        self,
        asset_class: AssetClass,
        paths: Sequence[str],
        scene: Any,
        position: Vec3,
        rotation: Quat,
        skip_dialogue: bool,
    ) -> None:
        ...


class Notifier(Protocol):
    """User-visible notifications"""

    def notify(self, message: str, level: str = "error") -> None:
        ...


class ProgressIndicator(ProgressReporter, Protocol):
    """A visual progress reporter that can be taken down"""

    def remove(self) -> None:
        ...


class IndicatorFactory(Protocol):
    def create(self, label: str) -> ProgressIndicator:
        ...


@dataclass(frozen=True)
class ImportRecord:
    """One import hand-off as seen by StagingImporter"""
    asset_class: AssetClass
    source: str
    path: str
    scene: Any
    position: Vec3
    rotation: Quat
    skip_dialogue: bool


class StagingImporter:
    """
    Headless import hand-off: copies staged GLBs into an output directory.

    ``logo.svg.glb`` in the cache is written as ``logo.glb``. Every hand-off
    is kept in ``records`` together with its placement.
    """

    def __init__(self, output_dir: Optional[str] = None):
        self.output_dir = output_dir
        self.records: List[ImportRecord] = []

    @staticmethod
    def output_name(staged_path: str) -> str:
        name, ext = os.path.splitext(os.path.basename(staged_path))
        stem, inner_ext = os.path.splitext(name)
        if inner_ext.lower() == ".svg":
            name = stem
        return f"{name}{ext}"

    def import_assets(
        self,
        asset_class: AssetClass,
        paths: Sequence[str],
        scene: Any,
        position: Vec3,
        rotation: Quat,
        skip_dialogue: bool,
    ) -> None:
        for path in paths:
            target = path
            if self.output_dir:
                os.makedirs(self.output_dir, exist_ok=True)
                target = os.path.join(self.output_dir, self.output_name(path))
                shutil.copy2(path, target)
            logger.info(f"Imported {asset_class.value} {target} at {position.to_list()}")
            self.records.append(ImportRecord(asset_class, path, target, scene, position, rotation, skip_dialogue))


class LoggingNotifier:
    def notify(self, message: str, level: str = "error") -> None:
        logger.log(logging.ERROR if level == "error" else logging.WARNING, message)


class LoggingIndicator(LoggingReporter):
    """Progress indicator backed by the log"""

    def __init__(self, label: str):
        super().__init__(name=label)
        self.removed = False

    def remove(self) -> None:
        self.removed = True
        logger.debug(f"Removed progress indicator for {self.name}")


class LoggingIndicatorFactory:
    def __init__(self):
        self.indicators: List[LoggingIndicator] = []

    def create(self, label: str) -> LoggingIndicator:
        indicator = LoggingIndicator(label)
        self.indicators.append(indicator)
        return indicator
