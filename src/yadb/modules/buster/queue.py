"""Bounded work queue with in-flight tracking and quiescence detection."""

import logging
import threading
from collections import deque

from .models import Candidate

logger = logging.getLogger(__name__)


class WorkQueue:
    """Multi-producer, multi-consumer queue of candidates.

    All state lives behind one condition variable. The queue closes itself
    once it is empty, no candidate is in flight and no producer holds an
    open registration; ``get`` then returns ``None`` to every consumer.

    Pending candidates are bounded by ``maxsize``, but the set of issued URLs
    used for deduplication grows with every candidate for the lifetime of the
    scan. A scan of N candidates holds N URLs; only the wordlist itself is
    streamed.
    """

    def __init__(self, maxsize: int):
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self.maxsize = maxsize
        self._items: deque[Candidate] = deque()
        self._cond = threading.Condition()
        self._seen: set[str] = set()
        self._issued = 0
        self._completed = 0
        self._in_flight = 0
        self._holds = 0
        self._max_size = 0
        self._dropped = 0
        self._closed = False
        self._cancelled = False

    def put(self, candidate: Candidate) -> bool:
        """Enqueue a candidate, blocking while the queue is at its high-water mark.

        Returns False when the URL was already issued or the queue is closed.
        """
        with self._cond:
            while True:
                if self._closed or candidate.url in self._seen:
                    return False
                if len(self._items) < self.maxsize:
                    break
                self._cond.wait()
            self._seen.add(candidate.url)
            self._items.append(candidate)
            self._issued += 1
            if len(self._items) > self._max_size:
                self._max_size = len(self._items)
            self._cond.notify_all()
            return True

    def get(self) -> Candidate | None:
        """Take the next candidate and mark it in flight; None once closed."""
        with self._cond:
            while not self._items:
                if self._closed:
                    return None
                self._cond.wait()
            candidate = self._items.popleft()
            self._in_flight += 1
            self._cond.notify_all()
            return candidate

    def task_done(self) -> None:
        """Release the in-flight slot taken by ``get``."""
        with self._cond:
            if self._in_flight <= 0:
                raise ValueError("task_done() called more times than get()")
            self._in_flight -= 1
            self._completed += 1
            self._close_if_quiescent()

    def hold(self) -> bool:
        """Register a producer that may still enqueue work.

        Must be called while the caller still keeps the queue from being
        quiescent (an in-flight slot or another hold).
        """
        with self._cond:
            if self._closed:
                return False
            self._holds += 1
            return True

    def release(self) -> None:
        """Drop a producer registration taken with ``hold``."""
        with self._cond:
            if self._holds <= 0:
                raise ValueError("release() called more times than hold()")
            self._holds -= 1
            self._close_if_quiescent()

    def close(self, cancel: bool = False) -> None:
        """Stop accepting work. With ``cancel`` pending candidates are discarded."""
        with self._cond:
            if cancel and not self._cancelled:
                self._cancelled = True
                self._dropped += len(self._items)
                self._items.clear()
            if not self._closed:
                self._closed = True
                logger.debug(
                    "Work queue closed (cancel=%s, issued=%d, completed=%d)",
                    cancel,
                    self._issued,
                    self._completed,
                )
            self._cond.notify_all()

    def wait_closed(self, timeout: float | None = None) -> bool:
        """Block until the queue is closed; returns the closed flag."""
        with self._cond:
            return self._cond.wait_for(lambda: self._closed, timeout)

    def _close_if_quiescent(self) -> None:
        if self._closed:
            return
        if not self._items and self._in_flight == 0 and self._holds == 0:
            self._closed = True
            logger.debug("Work queue quiescent after %d candidates", self._completed)
            self._cond.notify_all()

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    @property
    def issued(self) -> int:
        with self._cond:
            return self._issued

    @property
    def completed(self) -> int:
        with self._cond:
            return self._completed

    @property
    def in_flight(self) -> int:
        with self._cond:
            return self._in_flight

    @property
    def holds(self) -> int:
        with self._cond:
            return self._holds

    @property
    def max_size(self) -> int:
        with self._cond:
            return self._max_size

    @property
    def dropped(self) -> int:
        with self._cond:
            return self._dropped

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    @property
    def cancelled(self) -> bool:
        with self._cond:
            return self._cancelled
