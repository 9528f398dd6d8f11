"""Active parcel selection — at most one at a time, latest request wins.

A new pick supersedes whatever is in flight. Each pick takes a generation
token from ``begin()``; a result arriving with an older token is discarded,
never merged into the current selection.
"""

from __future__ import annotations

import logging
import threading

from cadastre.engine.context import ParcelResult

logger = logging.getLogger(__name__)


class SelectionTracker:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._generation = 0
        self._active: ParcelResult | None = None

    def begin(self) -> int:
        """Start a new selection cycle and return its token."""
        with self._lock:
            self._generation += 1
            return self._generation

    def complete(self, token: int, result: ParcelResult) -> bool:
        """Install ``result`` if ``token`` is still the latest. Returns whether it was."""
        with self._lock:
            if token != self._generation:
                logger.debug("Discarding stale selection %d (current %d)", token, self._generation)
                return False
            self._active = result
            return True

    def clear(self) -> None:
        """Drop the active selection; in-flight cycles become stale."""
        with self._lock:
            self._generation += 1
            self._active = None

    @property
    def active(self) -> ParcelResult | None:
        with self._lock:
            return self._active

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation
