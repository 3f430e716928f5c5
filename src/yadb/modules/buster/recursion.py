"""Recursion controller: expands discovered directories at most once."""

import logging
import threading
from collections import deque

from .models import ExpansionState, ProbeResult, Verdict
from .queue import WorkQueue

logger = logging.getLogger(__name__)


def directory_prefix(path: str) -> str:
    """Relative prefix children of a directory are generated under."""
    return path.rstrip("/") + "/"


class RecursionController:
    """Track discovered directories and hand expansions to the feeder.

    Each directory moves ``DISCOVERED -> EXPANDING -> EXPANDED``. Directories
    found at the maximum depth go straight to ``EXPANDED``. Workers only
    register an expansion here; the feeder thread does the (blocking)
    enqueueing of the children.
    """

    def __init__(self, max_depth: int, queue: WorkQueue):
        self.max_depth = max_depth
        self._queue = queue
        self._cond = threading.Condition()
        self._states: dict[str, ExpansionState] = {}
        self._pending: deque[tuple[str, int]] = deque()
        self._scheduled: list[str] = []
        self._shutdown = False

    def submit(self, result: ProbeResult) -> bool:
        """Schedule an expansion for a directory-like hit.

        Returns True when a new expansion was scheduled.
        """
        if self.max_depth <= 0 or not result.directory:
            return False
        if result.verdict not in (Verdict.FOUND, Verdict.REDIRECT):
            return False

        prefix = directory_prefix(result.candidate.path)
        with self._cond:
            if self._shutdown or prefix in self._states:
                return False
            if result.depth >= self.max_depth:
                self._states[prefix] = ExpansionState.EXPANDED
                return False
            # Hold before the worker releases its in-flight slot.
            if not self._queue.hold():
                return False
            self._states[prefix] = ExpansionState.DISCOVERED
            self._pending.append((prefix, result.depth + 1))
            self._scheduled.append(prefix)
            self._cond.notify_all()
        logger.info("Queued recursion into %s (depth %d)", result.url, result.depth + 1)
        return True

    def next_expansion(self) -> tuple[str, int] | None:
        """Block until an expansion is pending; None after shutdown."""
        with self._cond:
            while not self._pending:
                if self._shutdown:
                    return None
                self._cond.wait()
            if self._shutdown:
                return None
            prefix, depth = self._pending.popleft()
            self._states[prefix] = ExpansionState.EXPANDING
            return prefix, depth

    def finish(self, prefix: str) -> None:
        """Mark an expansion as fully enqueued and drop its producer hold."""
        with self._cond:
            self._states[prefix] = ExpansionState.EXPANDED
        self._queue.release()

    def shutdown(self) -> None:
        """Wake the feeder and refuse further expansions."""
        with self._cond:
            self._shutdown = True
            self._cond.notify_all()

    def state(self, path: str) -> ExpansionState | None:
        with self._cond:
            return self._states.get(directory_prefix(path))

    @property
    def pending(self) -> int:
        with self._cond:
            return len(self._pending)

    @property
    def expanded(self) -> list[str]:
        """Prefixes scheduled for expansion, in discovery order."""
        with self._cond:
            return list(self._scheduled)
