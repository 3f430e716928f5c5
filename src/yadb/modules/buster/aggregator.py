"""Serializes concurrently produced results into sinks and counters."""

import logging
import threading
import time
from collections.abc import Callable, Iterable

from .models import ProbeResult, ProgressSnapshot, Verdict
from .queue import WorkQueue
from .sinks import ResultSink

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressSnapshot], None]

REPORTED_VERDICTS = (Verdict.FOUND, Verdict.REDIRECT)


class ResultAggregator:
    """Count every result and forward interesting ones to each sink once."""

    def __init__(
        self,
        sinks: Iterable[ResultSink] = (),
        report_errors: bool = False,
        progress: ProgressCallback | None = None,
        progress_interval: float = 0.1,
        queue: WorkQueue | None = None,
    ):
        self._sinks = list(sinks)
        self.report_errors = report_errors
        self._progress = progress
        self._progress_interval = progress_interval
        self._queue = queue
        self._lock = threading.Lock()
        self._counts: dict[Verdict, int] = {verdict: 0 for verdict in Verdict}
        self._completed = 0
        self._max_depth = 0
        self._findings: list[ProbeResult] = []
        self._failed: set[int] = set()
        self._last_progress = 0.0
        self._closed = False

    def should_report(self, result: ProbeResult) -> bool:
        if result.verdict in REPORTED_VERDICTS:
            return True
        return self.report_errors and result.verdict == Verdict.ERROR

    def record(self, result: ProbeResult) -> None:
        """Account for one result; safe to call from any worker thread."""
        report = self.should_report(result)
        now = time.monotonic()
        with self._lock:
            self._counts[result.verdict] += 1
            self._completed += 1
            self._max_depth = max(self._max_depth, result.depth)
            if report:
                self._findings.append(result)
            publish = now - self._last_progress >= self._progress_interval
            if publish:
                self._last_progress = now
        if report:
            self._write(result)
        if publish:
            self._publish()

    def _write(self, result: ProbeResult) -> None:
        for index, sink in enumerate(self._sinks):
            with self._lock:
                if index in self._failed:
                    continue
            try:
                sink.emit(result)
            except Exception:
                logger.error("Output sink %s failed; disabling it", sink.name, exc_info=True)
                with self._lock:
                    self._failed.add(index)

    def _publish(self) -> None:
        if self._progress is None:
            return
        try:
            self._progress(self.snapshot())
        except Exception:
            logger.warning("Progress reporter failed", exc_info=True)

    def snapshot(self) -> ProgressSnapshot:
        with self._lock:
            completed = self._completed
            found = self._counts[Verdict.FOUND] + self._counts[Verdict.REDIRECT]
            errors = self._counts[Verdict.ERROR]
        issued = self._queue.issued if self._queue is not None else completed
        queued = len(self._queue) if self._queue is not None else 0
        return ProgressSnapshot(
            issued=issued,
            completed=completed,
            found=found,
            errors=errors,
            queued=queued,
        )

    def finalize(self) -> None:
        """Publish a last snapshot and close every sink."""
        if self._closed:
            return
        self._closed = True
        self._publish()
        for index, sink in enumerate(self._sinks):
            try:
                sink.close()
            except Exception:
                logger.error("Failed to close output sink %s", sink.name, exc_info=True)
                with self._lock:
                    self._failed.add(index)

    @property
    def counts(self) -> dict[Verdict, int]:
        with self._lock:
            return dict(self._counts)

    @property
    def completed(self) -> int:
        with self._lock:
            return self._completed

    @property
    def max_depth(self) -> int:
        with self._lock:
            return self._max_depth

    @property
    def findings(self) -> list[ProbeResult]:
        with self._lock:
            return list(self._findings)

    @property
    def output_incomplete(self) -> bool:
        with self._lock:
            return bool(self._failed)
