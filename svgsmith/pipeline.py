"""
SVG conversion pipeline

Splits an import batch into SVGs to convert and files to pass back, then runs
one independent asyncio task per SVG:

    indicator -> script -> Blender -> staged GLB -> import hand-off

Grid offsets are handed out when a task is dispatched, so assets are placed
in submission order however the conversions finish. A failed conversion is
logged and ends its own task only.
"""

import asyncio
import logging
import os
from typing import Any, List, Optional, Sequence, Set

from .blender import BlenderLocator
from .config import PipelineConfig
from .exceptions import ConversionFailedError, RunnerFaultError
from .host import (
    AssetClass,
    ImportHandoff,
    IndicatorFactory,
    LoggingIndicatorFactory,
    LoggingNotifier,
    Notifier,
    ProgressIndicator,
    StagingImporter,
)
from .layout import GridLayoutCursor, Placement, Quat
from .models import BatchResult, ConversionJob
from .progress import LoopBoundReporter, SafeReporter
from .runner import ProcessRunner
from .sanitizer import partition
from .script import generate_conversion_script

logger = logging.getLogger(__name__)

TOOL_UNAVAILABLE_MESSAGE = "Blender was not installed or detected.\nSVG Importer will not run"
START_TEXT = "Got SVG! Starting conversion..."
DONE_TEXT = "Conversion complete!"


class ConversionPipeline:
    """
    Converts SVG files from an import batch into GLB models.

    Example:
        >>> pipeline = ConversionPipeline(PipelineConfig.from_env(), importer=StagingImporter("out"))
        >>> result = await pipeline.process_and_wait(["logo.svg", "photo.png"])
        >>> result.passthrough
        ['photo.png']
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        importer: Optional[ImportHandoff] = None,
        locator: Optional[BlenderLocator] = None,
        runner: Optional[ProcessRunner] = None,
        notifier: Optional[Notifier] = None,
        indicators: Optional[IndicatorFactory] = None,
    ):
        self.config = config or PipelineConfig()
        self.importer = importer or StagingImporter()
        self.locator = locator or BlenderLocator(self.config.blender_path)
        self.runner = runner or ProcessRunner(self.config.script_dir, self.config.process_timeout)
        self.notifier = notifier or LoggingNotifier()
        self.indicators = indicators or LoggingIndicatorFactory()
        self._tasks: Set[asyncio.Task] = set()

    def process(self, batch: Sequence[str], origin: Optional[Placement] = None, scene: Any = None) -> List[str]:
        """
        Start converting every SVG in ``batch`` and return the rest.

        Must be called from a running event loop; conversions continue as
        tasks on that loop after this returns. Use ``join()`` to wait for them.

        Args:
            batch: Candidate file paths
            origin: Placement the grid is laid out from
            scene: Opaque scene handle forwarded to the import hand-off

        Returns:
            Paths the caller should import itself, in submission order
        """
        return self._dispatch(batch, origin, scene).passthrough

    async def process_and_wait(
        self, batch: Sequence[str], origin: Optional[Placement] = None, scene: Any = None
    ) -> BatchResult:
        """Like ``process()``, but waits for the batch and reports every job"""
        result = self._dispatch(batch, origin, scene)
        await self.join()
        return result

    async def join(self) -> List[ConversionJob]:
        """Wait for the conversions still in flight and return their jobs"""
        tasks = list(self._tasks)
        results = await asyncio.gather(*tasks, return_exceptions=True)
        return [r for r in results if isinstance(r, ConversionJob)]

    def _dispatch(self, batch: Sequence[str], origin: Optional[Placement], scene: Any) -> BatchResult:
        batch = list(batch)
        origin = origin or Placement()

        if not self.config.enabled:
            return BatchResult(passthrough=batch)

        tool = self.locator.locate()
        if not tool.available:
            self.notifier.notify(TOOL_UNAVAILABLE_MESSAGE, "error")
            return BatchResult(passthrough=batch, tool_available=False)

        parts = partition(batch)
        result = BatchResult(
            passthrough=parts.passthrough,
            rejected=[(path, reason.value) for path, reason in parts.rejected],
        )
        if not parts.convertible:
            return result

        loop = asyncio.get_running_loop()
        claimed = set()
        cursor = GridLayoutCursor(self.config.row_size, self.config.grid_spacing)
        for index, source in enumerate(parts.convertible):
            offset = cursor.next()
            job = ConversionJob(
                source=source,
                destination=self.config.destination_for(source),
                index=index,
                placement=Placement(origin.position + offset, Quat.identity()),
            )
            result.jobs.append(job)
            # Only the first job writing a destination clears a stale file;
            # later ones would delete a sibling's fresh output.
            clear_stale = job.destination not in claimed
            claimed.add(job.destination)
            task = loop.create_task(self._convert(job, tool.executable, scene, loop, clear_stale))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            logger.debug(f"Dispatched {source} -> {job.destination} (grid index {index})")
        return result

    async def _convert(
        self,
        job: ConversionJob,
        executable: str,
        scene: Any,
        loop: asyncio.AbstractEventLoop,
        clear_stale: bool = True,
    ) -> ConversionJob:
        indicator = self._create_indicator(job)
        reporter = SafeReporter(LoopBoundReporter(indicator, loop)) if indicator else None
        if reporter:
            reporter.update(0.0, START_TEXT, "")

        job.mark_running()
        try:
            os.makedirs(self.config.cache_dir, exist_ok=True)
            if clear_stale and os.path.exists(job.destination):
                os.remove(job.destination)
            script = generate_conversion_script(job.source, job.destination)
            await self.runner.run(script, executable, reporter)
            if not os.path.exists(job.destination):
                raise ConversionFailedError(0, f"Blender produced no output file at {job.destination}")
        except ConversionFailedError as e:
            logger.error(f"Conversion of {job.source} failed (rc={e.exit_code})\n{e.output}")
            return self._fail(job, e, indicator, loop)
        except RunnerFaultError as e:
            logger.error(f"Blender runner fault while converting {job.source}", exc_info=e)
            return self._fail(job, e, indicator, loop)
        except Exception as e:
            logger.exception(f"Could not convert {job.source}")
            return self._fail(job, e, indicator, loop)

        job.mark_succeeded()
        if reporter:
            reporter.complete(DONE_TEXT)
            loop.call_later(self.config.indicator_linger_seconds, self._remove_indicator, indicator)

        try:
            self.importer.import_assets(
                AssetClass.MODEL,
                [job.destination],
                scene,
                job.placement.position,
                job.placement.rotation,
                self.config.skip_import_dialogue,
            )
        except Exception as e:
            logger.exception(f"Import hand-off failed for {job.destination}")
            job.mark_failed(e)
        return job

    def _create_indicator(self, job: ConversionJob) -> Optional[ProgressIndicator]:
        try:
            return self.indicators.create(os.path.basename(job.source))
        except Exception as e:
            logger.warning(f"Could not create progress indicator for {job.source}: {e}")
            return None

    def _fail(self, job, error, indicator, loop) -> ConversionJob:
        job.mark_failed(error)
        if indicator:
            loop.call_soon(self._remove_indicator, indicator)
        return job

    @staticmethod
    def _remove_indicator(indicator: ProgressIndicator) -> None:
        try:
            indicator.remove()
        except Exception as e:
            logger.warning(f"Could not remove progress indicator: {e}")
