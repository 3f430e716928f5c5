"""Probe workers: one HTTP request per candidate."""

import logging
import time
from collections.abc import Callable, Collection

import httpx

from yadb.tools.http import HTTPClient

from .classifier import classify, is_directory_like
from .models import Candidate, ProbeResult, Verdict
from .queue import WorkQueue

logger = logging.getLogger(__name__)


def error_kind(exc: Exception) -> str:
    """Short category name for a transport failure."""
    if isinstance(exc, httpx.TimeoutException):
        return "timeout"
    if isinstance(exc, httpx.ProxyError):
        return "proxy"
    if isinstance(exc, httpx.ConnectError):
        return "connect"
    if isinstance(exc, httpx.ProtocolError):
        return "protocol"
    if isinstance(exc, httpx.TooManyRedirects):
        return "redirects"
    return "transport"


class Prober:
    """Issue a single request for a candidate and classify the outcome.

    Failed requests are never retried.
    """

    def __init__(
        self,
        client: HTTPClient,
        method: str = "GET",
        include_status: Collection[int] = (),
        heuristic: str = "redirect",
    ):
        self.client = client
        self.method = method.upper()
        self.include_status = frozenset(include_status)
        self.heuristic = heuristic

    def probe(self, candidate: Candidate) -> ProbeResult:
        started = time.perf_counter()
        try:
            response = self.client.request(self.method, candidate.url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            kind = error_kind(exc) if isinstance(exc, httpx.HTTPError) else "url"
            logger.debug("%s %s failed (%s): %s", self.method, candidate.url, kind, exc)
            return ProbeResult(
                candidate=candidate,
                verdict=Verdict.ERROR,
                elapsed=time.perf_counter() - started,
                method=self.method,
                error_kind=kind,
                error=str(exc) or type(exc).__name__,
            )

        verdict = classify(response.status_code, self.include_status)
        final_url = response.url if response.redirected else None
        directory = is_directory_like(
            candidate,
            verdict,
            heuristic=self.heuristic,
            location=response.location,
            final_url=final_url,
        )
        logger.debug("%s %s -> %d", self.method, candidate.url, response.status_code)
        return ProbeResult(
            candidate=candidate,
            verdict=verdict,
            status=response.status_code,
            size=response.size,
            elapsed=response.response_time,
            method=self.method,
            location=response.location,
            final_url=final_url,
            directory=directory,
        )


def worker_loop(
    queue: WorkQueue,
    prober: Prober,
    report: Callable[[ProbeResult], None],
    expand: Callable[[ProbeResult], bool],
) -> None:
    """Pull candidates until the queue closes.

    A result is reported before any expansion it triggers, and the in-flight
    slot is released only after both, so the queue cannot look quiescent
    while children are about to be scheduled. A failed report never skips
    the expansion.
    """
    while True:
        candidate = queue.get()
        if candidate is None:
            return
        try:
            try:
                result = prober.probe(candidate)
            except Exception as exc:
                logger.exception("Unexpected failure probing %s", candidate.url)
                result = ProbeResult(
                    candidate=candidate,
                    verdict=Verdict.ERROR,
                    method=prober.method,
                    error_kind="internal",
                    error=str(exc) or type(exc).__name__,
                )
            try:
                report(result)
            except Exception:
                logger.exception("Failed to report result for %s", candidate.url)
            try:
                expand(result)
            except Exception:
                logger.exception("Failed to schedule recursion for %s", candidate.url)
        finally:
            queue.task_done()
