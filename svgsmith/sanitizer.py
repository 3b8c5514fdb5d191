"""
Input validation for SVG batches

Decides which candidate paths are handed to Blender, which are passed back to
the caller untouched, and which are dropped because Blender's SVG importer
cannot read their names.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .exceptions import UnsupportedCharactersError

logger = logging.getLogger(__name__)

SVG_FILE_EXTENSION = "svg"
MAX_ANSI_CODE = 255


class RejectReason(str, Enum):
    WRONG_EXTENSION = "wrong_extension"
    UNSUPPORTED_CHARACTERS = "unsupported_characters"


@dataclass(frozen=True)
class Classification:
    """Verdict for a single path. ``reason`` is None when convertible."""
    path: str
    reason: Optional[RejectReason] = None

    @property
    def convertible(self) -> bool:
        return self.reason is None


@dataclass
class Partition:
    """Result of splitting a batch, each list in submission order"""
    convertible: List[str] = field(default_factory=list)
    passthrough: List[str] = field(default_factory=list)
    rejected: List[Tuple[str, RejectReason]] = field(default_factory=list)


def has_svg_extension(path: str, extension: str = SVG_FILE_EXTENSION) -> bool:
    file_name = os.path.basename(path.replace("\\", "/"))
    return file_name.lower().endswith("." + extension.lower())


def contains_unsupported_characters(text: str) -> bool:
    """True if any character lies outside the 0-255 code point range"""
    return any(ord(c) > MAX_ANSI_CODE for c in text)


def classify(path: str, extension: str = SVG_FILE_EXTENSION) -> Classification:
    """
    Classify one candidate path.

    Args:
        path: Candidate file path
        extension: Target vector extension, without the dot

    Returns:
        Classification: convertible, or rejected with a reason
    """
    if not has_svg_extension(path, extension):
        return Classification(path, RejectReason.WRONG_EXTENSION)
    if contains_unsupported_characters(path):
        return Classification(path, RejectReason.UNSUPPORTED_CHARACTERS)
    return Classification(path)


def partition(batch: Sequence[str], extension: str = SVG_FILE_EXTENSION) -> Partition:
    """
    Split a batch into convertible, passthrough and rejected paths.

    Non-SVG files go to passthrough so the caller can import them normally.
    SVG files with unsupported names are dropped with a warning. A path that
    appears twice is only converted once.
    """
    result = Partition()
    seen = set()
    for path in batch:
        verdict = classify(path, extension)
        if verdict.reason is RejectReason.WRONG_EXTENSION:
            result.passthrough.append(path)
        elif verdict.reason is RejectReason.UNSUPPORTED_CHARACTERS:
            logger.warning(str(UnsupportedCharactersError(path)))
            result.rejected.append((path, verdict.reason))
        elif path not in seen:
            seen.add(path)
            result.convertible.append(path)
        else:
            logger.debug(f"Skipping duplicate SVG in batch: {path}")
    return result
