"""
Concurrency Control Service for RPS Arena

Serializes every state transition on the session directory behind one
re-entrant lock and runs deferred work (notification delivery) once the
outermost operation on a thread has released it.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Callable, List

logger = logging.getLogger(__name__)


class ConcurrencyControlService:
    """Manages the exclusive section shared by the directory, matchmaker and flow service."""

    def __init__(self):
        self._directory_lock = threading.RLock()
        self._local = threading.local()
        self._release_callbacks: List[Callable[[], None]] = []

    def _get_depth(self) -> int:
        return getattr(self._local, 'depth', 0)

    def in_operation(self) -> bool:
        """True if the calling thread currently holds the directory lock."""
        return self._get_depth() > 0

    def add_release_callback(self, callback: Callable[[], None]) -> None:
        """Register work to run after each outermost operation releases the lock."""
        self._release_callbacks.append(callback)

    @contextmanager
    def directory_operation(self):
        """
        Context manager for one logical directory operation.

        Nested operations on the same thread share the outer lock; release
        callbacks run only when the outermost one exits.
        """
        try:
            with self._directory_lock:
                self._local.depth = self._get_depth() + 1
                try:
                    yield
                finally:
                    self._local.depth -= 1
        finally:
            if self._get_depth() == 0:
                self._run_release_callbacks()

    def _run_release_callbacks(self) -> None:
        for callback in self._release_callbacks:
            try:
                callback()
            except Exception as e:
                logger.error(f"Error in release callback {getattr(callback, '__name__', callback)}: {e}", exc_info=True)
