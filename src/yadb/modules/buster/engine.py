"""Concurrent scan engine wiring the queue, workers, recursion and output."""

import logging
import threading
import time
from collections.abc import Iterable, Sequence

import httpx

from yadb.tools.http import HTTPClient

from .aggregator import ProgressCallback, ResultAggregator
from .candidates import iter_candidates, parse_target
from .models import Candidate, ConfigError, ScanConfig, ScanSummary
from .prober import Prober, worker_loop
from .queue import WorkQueue
from .recursion import RecursionController
from .sinks import ResultSink

logger = logging.getLogger(__name__)

_JOIN_INTERVAL = 0.2


class ScanEngine:
    """Run one directory brute-force scan.

    A feeder thread streams candidates into a bounded queue; ``threads``
    worker threads probe them. Recursion expansions are queued by the
    workers and streamed by the feeder, so only the feeder ever blocks on
    the queue's high-water mark.
    """

    def __init__(
        self,
        config: ScanConfig,
        wordlist: Iterable[str],
        sinks: Sequence[ResultSink] = (),
        progress: ProgressCallback | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        config.validate()
        self.config = config
        self.target = parse_target(config.target)
        if config.max_depth > 0 and iter(wordlist) is wordlist:
            raise ConfigError("Recursion requires a wordlist that can be read more than once")
        self.wordlist = wordlist
        self.queue = WorkQueue(config.high_water_mark)
        self.recursion = RecursionController(config.max_depth, self.queue)
        self.aggregator = ResultAggregator(
            sinks,
            report_errors=config.report_errors,
            progress=progress,
            queue=self.queue,
        )
        self._transport = transport
        self._started = False
        self._lock = threading.Lock()

    def run(self) -> ScanSummary:
        """Scan until quiescence or cancellation and return the summary."""
        with self._lock:
            if self._started:
                raise RuntimeError("A scan engine can only run once")
            self._started = True

        config = self.config
        started = time.perf_counter()
        logger.info(
            "Starting scan of %s (threads=%d, depth=%d, timeout=%.1fs)",
            self.target.url,
            config.threads,
            config.max_depth,
            config.timeout,
        )
        client = HTTPClient(
            timeout=config.timeout,
            follow_redirects=config.follow_redirects,
            verify_ssl=config.verify_tls,
            proxy=config.proxy,
            user_agent=config.user_agent,
            max_connections=config.threads,
            transport=self._transport,
        )
        with client:
            prober = Prober(
                client,
                method=config.method,
                include_status=config.include_status,
                heuristic=config.directory_heuristic,
            )
            # The initial wordlist pass counts as a producer until exhausted.
            self.queue.hold()
            feeder = threading.Thread(target=self._feed, name="yadb-feeder", daemon=True)
            workers = [
                threading.Thread(
                    target=worker_loop,
                    args=(self.queue, prober, self.aggregator.record, self.recursion.submit),
                    name=f"yadb-worker-{index}",
                    daemon=True,
                )
                for index in range(config.threads)
            ]
            feeder.start()
            for worker in workers:
                worker.start()
            try:
                _join_all(workers)
            except KeyboardInterrupt:
                logger.warning("Interrupted; waiting for in-flight requests")
                self.stop()
                _join_all(workers)
            self.recursion.shutdown()
            _join_all([feeder])

        self.aggregator.finalize()
        summary = self._summary(time.perf_counter() - started)
        logger.info(
            "Scan of %s %s: %d/%d probed, %d found in %.2fs",
            self.target.url,
            "cancelled" if summary.cancelled else "completed",
            summary.completed,
            summary.issued,
            summary.found,
            summary.elapsed,
        )
        return summary

    def stop(self) -> None:
        """Cancel the scan: drop queued work and let in-flight probes finish."""
        logger.warning("Stopping scan of %s", self.target.url)
        self.queue.close(cancel=True)
        self.recursion.shutdown()

    def _feed(self) -> None:
        try:
            self._produce(iter_candidates(self.target, self.wordlist))
        finally:
            self.queue.release()
        while True:
            expansion = self.recursion.next_expansion()
            if expansion is None:
                return
            prefix, depth = expansion
            try:
                self._produce(
                    iter_candidates(self.target, self.wordlist, prefix=prefix, depth=depth)
                )
            finally:
                self.recursion.finish(prefix)

    def _produce(self, candidates: Iterable[Candidate]) -> None:
        try:
            for candidate in candidates:
                if candidate.depth > self.config.max_depth:
                    continue
                if not self.queue.put(candidate) and self.queue.closed:
                    return
        except Exception:
            logger.exception("Failed to read candidates from %r", self.wordlist)

    def _summary(self, elapsed: float) -> ScanSummary:
        return ScanSummary(
            target=self.target.url,
            issued=self.queue.issued,
            completed=self.queue.completed,
            counts=self.aggregator.counts,
            findings=self.aggregator.findings,
            expanded=self.recursion.expanded,
            max_depth_reached=self.aggregator.max_depth,
            max_queue_size=self.queue.max_size,
            elapsed=elapsed,
            cancelled=self.queue.cancelled,
            output_incomplete=self.aggregator.output_incomplete,
        )


def _join_all(threads: Sequence[threading.Thread]) -> None:
    for thread in threads:
        while thread.is_alive():
            thread.join(_JOIN_INTERVAL)
