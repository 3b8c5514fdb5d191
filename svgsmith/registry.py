"""
Import handler registry

An explicit extension point: the host owns a registry mapping file
extensions to batch handlers, and the SVG pipeline registers itself once at
startup. A handler takes ``(batch, origin, scene)`` and returns the paths it
did not consume.
"""

import logging
import os
from typing import Any, Callable, Dict, List, Optional, Sequence

from .exceptions import RegistrationError

logger = logging.getLogger(__name__)

ImportHandler = Callable[..., List[str]]


def _normalize(extension: str) -> str:
    return extension.lstrip(".").lower()


class ImportHandlerRegistry:
    def __init__(self):
        self._handlers: Dict[str, ImportHandler] = {}

    def register(self, extension: str, handler: ImportHandler) -> None:
        """
        Register ``handler`` for files ending in ``extension``.

        Raises:
            RegistrationError: If the extension is empty or already taken
        """
        ext = _normalize(extension)
        if not ext:
            raise RegistrationError(extension, "empty extension")
        if not callable(handler):
            raise RegistrationError(ext, "handler is not callable")
        if ext in self._handlers:
            raise RegistrationError(ext, "extension already has a handler")
        self._handlers[ext] = handler

    def handler_for(self, path: str) -> Optional[ImportHandler]:
        ext = os.path.splitext(path.replace("\\", "/"))[1]
        return self._handlers.get(_normalize(ext))

    def extensions(self) -> List[str]:
        return sorted(self._handlers)

    def dispatch(self, batch: Sequence[str], origin: Any = None, scene: Any = None) -> List[str]:
        """
        Offer the batch to every registered handler in registration order.

        Each handler sees what the previous ones passed back. Returns the
        paths left for the host's default import.
        """
        remaining = list(batch)
        for handler in list(self._handlers.values()):
            if not any(self.handler_for(p) is handler for p in remaining):
                continue
            remaining = list(handler(remaining, origin, scene))
        return remaining


def install(registry: ImportHandlerRegistry, pipeline, extension: str = "svg") -> bool:
    """
    Register ``pipeline`` as the importer for ``extension``.

    Failure leaves the integration inert: it is logged and False is returned.
    """
    try:
        registry.register(extension, pipeline.process)
    except Exception as e:
        error = e if isinstance(e, RegistrationError) else RegistrationError(extension, str(e))
        logger.error(f"{error}. SVG import support is disabled.")
        return False
    logger.debug(f"SVG import extension .{_normalize(extension)} added successfully")
    return True
