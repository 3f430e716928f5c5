"""Concurrent directory brute-force engine."""

from .aggregator import ResultAggregator
from .candidates import iter_candidates, join_path, make_candidate, parse_target
from .classifier import classify, is_directory_like
from .engine import ScanEngine
from .models import (
    Candidate,
    ConfigError,
    ExpansionState,
    ProbeResult,
    ProgressSnapshot,
    ScanConfig,
    ScanSummary,
    Target,
    Verdict,
)
from .prober import Prober, worker_loop
from .queue import WorkQueue
from .recursion import RecursionController
from .sinks import ConsoleSink, FileSink, MemorySink, ResultSink
from .wordlist import Wordlist

__all__ = [
    "Candidate",
    "ConfigError",
    "ConsoleSink",
    "ExpansionState",
    "FileSink",
    "MemorySink",
    "ProbeResult",
    "Prober",
    "ProgressSnapshot",
    "RecursionController",
    "ResultAggregator",
    "ResultSink",
    "ScanConfig",
    "ScanEngine",
    "ScanSummary",
    "Target",
    "Verdict",
    "WorkQueue",
    "Wordlist",
    "classify",
    "is_directory_like",
    "iter_candidates",
    "join_path",
    "make_candidate",
    "parse_target",
    "worker_loop",
]
