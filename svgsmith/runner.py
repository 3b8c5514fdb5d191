"""
Blender process runner

Runs a generated script through Blender in background mode without blocking
the event loop, streaming stdout to a progress reporter line by line.
"""

import asyncio
import logging
import os
import tempfile
from collections import deque
from typing import Deque, Optional

from .exceptions import ConversionFailedError, RunnerFaultError
from .progress import PROGRESS_SENTINEL, NullReporter, ProgressReporter, SafeReporter

logger = logging.getLogger(__name__)

# Autorun of scripts embedded in .blend files stays off; -b runs headless,
# -P executes our script.
BLENDER_FLAGS = ["--disable-autoexec", "-b", "-P"]

# Lines of output kept for the error message of a failed conversion
OUTPUT_TAIL_LINES = 200

# StreamReader line limit; Blender occasionally prints very long lines
STREAM_LIMIT = 1024 * 1024


class ProcessRunner:
    """
    Runs Blender scripts as subprocesses.

    Example:
        >>> runner = ProcessRunner()
        >>> await runner.run(script, "/usr/bin/blender", reporter)
    """

    def __init__(self, script_dir: Optional[str] = None, timeout: Optional[float] = None):
        """
        Args:
            script_dir: Where temporary scripts are written (system temp if None)
            timeout: Seconds before Blender is killed (no limit if None)
        """
        self.script_dir = script_dir
        self.timeout = timeout

    def build_command(self, executable: str, script_path: str) -> list:
        return [executable, *BLENDER_FLAGS, script_path]

    async def run(
        self,
        script_text: str,
        executable: str,
        reporter: Optional[ProgressReporter] = None,
    ) -> None:
        """
        Run ``script_text`` with Blender and wait for it to exit.

        The temporary script file is removed whatever the outcome, including
        cancellation. Cancelling the awaiting task kills Blender.

        Args:
            script_text: Python source for Blender
            executable: Blender executable (availability is checked by the caller)
            reporter: Receives each non-empty output line

        Raises:
            ConversionFailedError: Blender exited non-zero
            RunnerFaultError: Blender could not be launched or awaited
        """
        reporter = SafeReporter(reporter or NullReporter())
        script_path = self._write_script(script_text)
        try:
            await self._execute(executable, script_path, reporter)
        finally:
            self._remove_script(script_path)

    def _write_script(self, script_text: str) -> str:
        if self.script_dir:
            os.makedirs(self.script_dir, exist_ok=True)
        try:
            fd, path = tempfile.mkstemp(prefix="svgsmith_", suffix=".py", dir=self.script_dir)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(script_text)
        except OSError as e:
            raise RunnerFaultError(f"Could not write Blender script: {e}") from e
        logger.debug(f"Wrote Blender script to {path}")
        return path

    @staticmethod
    def _remove_script(path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove temporary script {path}: {e}")

    async def _execute(self, executable: str, script_path: str, reporter: ProgressReporter) -> None:
        cmd = self.build_command(executable, script_path)
        logger.debug("Launching: %s", " ".join(cmd))
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                limit=STREAM_LIMIT,
            )
        except OSError as e:
            raise RunnerFaultError(f"Failed to launch Blender ({executable}): {e}") from e

        output: Deque[str] = deque(maxlen=OUTPUT_TAIL_LINES)
        try:
            if self.timeout:
                returncode = await asyncio.wait_for(self._stream(process, reporter, output), self.timeout)
            else:
                returncode = await self._stream(process, reporter, output)
        except asyncio.CancelledError:
            logger.info(f"Conversion cancelled, killing Blender (pid {process.pid})")
            await self._kill(process)
            raise
        except asyncio.TimeoutError as e:
            await self._kill(process)
            raise RunnerFaultError(f"Blender did not finish within {self.timeout}s") from e
        except Exception as e:
            await self._kill(process)
            raise RunnerFaultError(f"Error while waiting for Blender: {e}") from e

        if returncode != 0:
            raise ConversionFailedError(returncode, "\n".join(output))

    @staticmethod
    async def _stream(process, reporter: ProgressReporter, output: Deque[str]) -> int:
        async for raw in process.stdout:
            line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
            if not line.strip():
                continue
            output.append(line)
            logger.info(line)
            reporter.update(PROGRESS_SENTINEL, line, "")
        return await process.wait()

    @staticmethod
    async def _kill(process) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
        await process.wait()
