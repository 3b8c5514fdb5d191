"""
Progress reporting

Reporters receive fractional progress and status text from a running
conversion. They are decoupled from the runner so a host UI, the CLI, a log
or a test can all consume the same stream.

Blender does not print structured percentages, so streamed lines arrive with
the fraction pinned at PROGRESS_SENTINEL.
"""

import asyncio
import logging
import threading
from typing import List, Optional, Protocol, runtime_checkable

from .models import ProgressEvent

logger = logging.getLogger(__name__)

PROGRESS_SENTINEL = 0.0


@runtime_checkable
class ProgressReporter(Protocol):
    """Sink for progress updates. Implementations must not raise."""

    def update(self, fraction: float, primary_text: str, secondary_text: str = "") -> None:
        ...

    def complete(self, final_text: str) -> None:
        ...


class NullReporter:
    """Discards everything"""

    def update(self, fraction: float, primary_text: str, secondary_text: str = "") -> None:
        pass

    def complete(self, final_text: str) -> None:
        pass


class LoggingReporter:
    """Writes progress to a logger"""

    def __init__(self, name: str = "", log: Optional[logging.Logger] = None):
        self.name = name
        self.log = log or logger

    def update(self, fraction: float, primary_text: str, secondary_text: str = "") -> None:
        prefix = f"[{self.name}] " if self.name else ""
        self.log.info(f"{prefix}{fraction:.0%} {primary_text}".rstrip())
        if secondary_text:
            self.log.debug(f"{prefix}{secondary_text}")

    def complete(self, final_text: str) -> None:
        prefix = f"[{self.name}] " if self.name else ""
        self.log.info(f"{prefix}{final_text}")


class RecordingReporter:
    """Keeps every event in memory"""

    def __init__(self):
        self.events: List[ProgressEvent] = []
        self.final_text: Optional[str] = None
        self._lock = threading.Lock()

    def update(self, fraction: float, primary_text: str, secondary_text: str = "") -> None:
        with self._lock:
            self.events.append(ProgressEvent(fraction, primary_text, secondary_text))

    def complete(self, final_text: str) -> None:
        with self._lock:
            self.final_text = final_text

    @property
    def completed(self) -> bool:
        return self.final_text is not None

    @property
    def lines(self) -> List[str]:
        return [e.primary_text for e in self.events]


class SafeReporter:
    """Wraps a reporter so a failure to render never reaches the pipeline"""

    def __init__(self, inner: ProgressReporter):
        self.inner = inner

    def update(self, fraction: float, primary_text: str, secondary_text: str = "") -> None:
        try:
            self.inner.update(fraction, primary_text, secondary_text)
        except Exception as e:
            logger.warning(f"Progress reporter failed on update: {e}")

    def complete(self, final_text: str) -> None:
        try:
            self.inner.complete(final_text)
        except Exception as e:
            logger.warning(f"Progress reporter failed on complete: {e}")


class LoopBoundReporter:
    """
    Dispatches calls onto the event loop that owns the wrapped reporter.

    Calls made from the loop's own thread run immediately; calls from any
    other thread are queued with ``call_soon_threadsafe``.
    """

    def __init__(self, inner: ProgressReporter, loop: asyncio.AbstractEventLoop):
        self.inner = inner
        self.loop = loop

    def _on_owner_thread(self) -> bool:
        try:
            return asyncio.get_running_loop() is self.loop
        except RuntimeError:
            return False

    def _dispatch(self, fn, *args) -> None:
        if self._on_owner_thread():
            fn(*args)
        elif self.loop.is_closed():
            logger.debug("Dropping progress update for closed loop")
        else:
            self.loop.call_soon_threadsafe(fn, *args)

    def update(self, fraction: float, primary_text: str, secondary_text: str = "") -> None:
        self._dispatch(self.inner.update, fraction, primary_text, secondary_text)

    def complete(self, final_text: str) -> None:
        self._dispatch(self.inner.complete, final_text)
