"""Background analysis runs where the newest request wins.

A host editor re-runs an analyzer whenever the text changes. Only the result
of the most recent submission per analyzer is ever handed back; anything
older is discarded when it is collected.
"""

from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging
import threading

from .engine import ANALYZERS, run_analysis

logger = logging.getLogger(__name__)


@dataclass
class _Submission:
    generation: int
    future: Future


class AnalysisSession:
    """Runs analyzers on a thread pool with last-invocation-wins semantics."""

    def __init__(self, max_workers: int = 2):
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="craftlens")
        self._lock = threading.Lock()
        self._generation = 0
        self._latest: Dict[str, _Submission] = {}

    def submit(self, name: str, text: str, **options) -> int:
        """Queue an analysis and return its generation number."""
        if name not in ANALYZERS:
            raise ValueError(f"Unknown analyzer '{name}'. Choose from: {', '.join(ANALYZERS)}")

        with self._lock:
            self._generation += 1
            generation = self._generation
            previous = self._latest.get(name)
            future = self._executor.submit(run_analysis, name, text, **options)
            self._latest[name] = _Submission(generation, future)

        if previous and previous.future.cancel():
            logger.debug("Cancelled queued %s run #%d", name, previous.generation)
        return generation

    def is_current(self, name: str, generation: int) -> bool:
        with self._lock:
            submission = self._latest.get(name)
            return submission is not None and submission.generation == generation

    def result(self, name: str, generation: int, timeout: Optional[float] = None) -> Optional[Any]:
        """Return the result for a generation, or None if a newer one superseded it."""
        with self._lock:
            submission = self._latest.get(name)
        if submission is None or submission.generation != generation:
            logger.debug("Discarding stale %s result #%d", name, generation)
            return None

        try:
            value = submission.future.result(timeout=timeout)
        except CancelledError:
            logger.debug("%s run #%d was cancelled by a newer submission", name, generation)
            return None
        if not self.is_current(name, generation):
            logger.debug("Discarding %s result #%d superseded while running", name, generation)
            return None
        return value

    def latest(self, name: str, timeout: Optional[float] = None) -> Optional[Any]:
        """Wait for and return the newest result for an analyzer."""
        while True:
            with self._lock:
                submission = self._latest.get(name)
            if submission is None:
                return None
            value = self.result(name, submission.generation, timeout=timeout)
            if value is not None:
                return value

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "AnalysisSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
