"""Data model for conversion jobs"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .layout import Placement


class JobState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ProgressEvent:
    """
    One progress update.

    Attributes:
        fraction: Completion in [0, 1]; mirrors raw Blender output so it is
                  not guaranteed to increase
        primary_text: Status line
        secondary_text: Optional detail line
    """
    fraction: float
    primary_text: str
    secondary_text: str = ""


@dataclass
class ConversionJob:
    """
    One SVG -> GLB conversion.

    Attributes:
        source: SVG path as submitted
        destination: Staged GLB path, derived from the source file name
        index: Position among the batch's convertible files
        placement: Where the converted asset is imported
        state: Lifecycle state
        error: Exception that failed the job, if any
    """
    source: str
    destination: str
    index: int
    placement: Placement
    state: JobState = JobState.PENDING
    error: Optional[BaseException] = None

    def mark_running(self) -> None:
        if self.state is not JobState.PENDING:
            raise ValueError(f"Cannot start job in state {self.state.value}")
        self.state = JobState.RUNNING

    def mark_succeeded(self) -> None:
        if self.state is not JobState.RUNNING:
            raise ValueError(f"Cannot finish job in state {self.state.value}")
        self.state = JobState.SUCCEEDED

    def mark_failed(self, error: BaseException) -> None:
        self.state = JobState.FAILED
        self.error = error


@dataclass
class BatchResult:
    """Outcome of a batch after every conversion has finished"""
    passthrough: List[str] = field(default_factory=list)
    rejected: List[Tuple[str, str]] = field(default_factory=list)
    jobs: List[ConversionJob] = field(default_factory=list)
    tool_available: bool = True

    @property
    def succeeded(self) -> List[ConversionJob]:
        return [j for j in self.jobs if j.state is JobState.SUCCEEDED]

    @property
    def failed(self) -> List[ConversionJob]:
        return [j for j in self.jobs if j.state is JobState.FAILED]

    @property
    def ok(self) -> bool:
        return self.tool_available and not self.failed
