"""
Report request generations.

A caller that fires a new report request while an older one is still in
flight must never see the older result replace the newer one.  Each request
takes a generation number from ``ReportRequestTracker.begin()``; a finished
result is kept only if its generation is still the latest issued.

Invariants:
    - Generation numbers are strictly increasing per tracker.
    - ``latest`` only ever moves to a result of a newer generation.
    - A stale result is discarded, never an error.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

from books_kernel.logging_config import LogContext, get_logger

logger = get_logger("modules.reporting.generation")

T = TypeVar("T")


class ReportRequestTracker(Generic[T]):
    """Hands out generation numbers and keeps the newest published result."""

    def __init__(self, name: str = "report"):
        self._name = name
        self._lock = threading.Lock()
        self._issued = 0
        self._published_generation = 0
        self._latest: T | None = None

    @property
    def current_generation(self) -> int:
        """The most recently issued generation (0 before any request)."""
        with self._lock:
            return self._issued

    @property
    def latest(self) -> T | None:
        """The result of the newest request that has published so far."""
        with self._lock:
            return self._latest

    def begin(self) -> int:
        """Start a request and return its generation number."""
        with self._lock:
            self._issued += 1
            generation = self._issued
        logger.debug(
            "report_request_started",
            extra={"tracker": self._name, "generation": generation},
        )
        return generation

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._issued

    def publish(self, generation: int, result: T) -> bool:
        """
        Store ``result`` if ``generation`` is still the latest request.

        Returns:
            True if the result was kept, False if it was discarded as stale.
        """
        with self._lock:
            current = self._issued
            if generation != current or generation <= self._published_generation:
                stale = True
            else:
                self._published_generation = generation
                self._latest = result
                stale = False

        if stale:
            logger.info(
                "report_result_discarded_stale",
                extra={
                    "tracker": self._name,
                    "generation": generation,
                    "current_generation": current,
                },
            )
            return False

        logger.debug(
            "report_result_published",
            extra={"tracker": self._name, "generation": generation},
        )
        return True

    def run(self, fetch: Callable[[], T]) -> T | None:
        """
        Begin a request, compute it with ``fetch`` and publish the result.

        Returns the result when it is still current, else None.  Exceptions
        from ``fetch`` propagate and publish nothing.
        """
        generation = self.begin()
        with LogContext.bind(request_generation=str(generation)):
            result = fetch()
            if self.publish(generation, result):
                return result
        return None
