"""
Index-wide lock serializing mutation and queries of the source index.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


class IndexLock:
    """
    Re-entrant lock guarding one SourceIndex.

    Indexing a file can recursively index its dependencies, and a definition
    query may trigger a lazy re-index, so the owning thread must be able to
    re-acquire the lock.
    """

    def __init__(self, name: str = "source-index"):
        """
        Initialize index lock.

        Args:
            name: Label used in log messages
        """
        self.name = name
        self.acquired_at: Optional[datetime] = None
        self._lock = threading.RLock()
        self._depth = 0

    def acquire(self, timeout: float = -1) -> bool:
        """
        Acquire the lock, blocking up to `timeout` seconds (forever when negative).

        Returns:
            True if lock acquired, False otherwise
        """
        acquired = self._lock.acquire(timeout=timeout)
        if not acquired:
            logger.warning(f"Failed to acquire lock: {self.name}")
            return False

        self._depth += 1
        if self._depth == 1:
            self.acquired_at = datetime.now(timezone.utc)
            logger.debug(f"Lock acquired: {self.name}")
        return True

    def release(self) -> None:
        """Release one level of the lock."""
        self._depth -= 1
        if self._depth == 0:
            self.acquired_at = None
            logger.debug(f"Lock released: {self.name}")
        self._lock.release()

    def __enter__(self):
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()

    @property
    def is_acquired(self) -> bool:
        """Check if lock is currently held by some thread."""
        return self.acquired_at is not None
