"""Data models for the directory brute-force engine."""

from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import urlsplit

DEFAULT_THREADS = 50
DEFAULT_DEPTH = 0
DEFAULT_TIMEOUT = 5.0
DEFAULT_METHOD = "GET"
DEFAULT_HEURISTIC = "redirect"

SUPPORTED_METHODS = ("GET", "HEAD")
DIRECTORY_HEURISTICS = ("redirect", "slash", "any", "none")


class ConfigError(ValueError):
    """Raised when a scan cannot start because its configuration is invalid."""


class Verdict(Enum):
    """Classified outcome of a single probe."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    REDIRECT = "redirect"
    ERROR = "error"


class ExpansionState(Enum):
    """Recursion state of a discovered directory."""

    DISCOVERED = "discovered"
    EXPANDING = "expanding"
    EXPANDED = "expanded"


@dataclass(frozen=True)
class Target:
    """Base URI of a scan. Immutable for the scan's lifetime."""

    scheme: str
    host: str
    port: int | None
    base_path: str

    @property
    def netloc(self) -> str:
        return f"{self.host}:{self.port}" if self.port is not None else self.host

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.netloc}{self.base_path}"


@dataclass(frozen=True)
class Candidate:
    """A single resolved URL to probe, with its recursion depth."""

    url: str
    path: str
    depth: int = 0


@dataclass
class ProbeResult:
    """Outcome of one probe against one candidate."""

    candidate: Candidate
    verdict: Verdict
    status: int | None = None
    size: int | None = None
    elapsed: float = 0.0
    method: str = DEFAULT_METHOD
    location: str | None = None
    final_url: str | None = None
    directory: bool = False
    error_kind: str | None = None
    error: str | None = None

    @property
    def url(self) -> str:
        return self.candidate.url

    @property
    def depth(self) -> int:
        return self.candidate.depth


@dataclass(frozen=True)
class ScanConfig:
    """Immutable configuration record for one scan."""

    target: str
    threads: int = DEFAULT_THREADS
    max_depth: int = DEFAULT_DEPTH
    timeout: float = DEFAULT_TIMEOUT
    method: str = DEFAULT_METHOD
    follow_redirects: bool = False
    include_status: tuple[int, ...] = ()
    report_errors: bool = False
    directory_heuristic: str = DEFAULT_HEURISTIC
    queue_size: int | None = None
    user_agent: str = "yadb"
    proxy: str | None = None
    verify_tls: bool = False
    output: str | None = None

    @property
    def high_water_mark(self) -> int:
        """Maximum number of queued candidates before producers block."""
        if self.queue_size is not None:
            return self.queue_size
        return max(self.threads * 4, self.threads + 64)

    def validate(self) -> None:
        """Raise ConfigError when any field is out of range."""
        try:
            target = urlsplit(self.target.strip()) if self.target else None
        except ValueError:
            target = None
        if target is None or target.scheme not in {"http", "https"} or not target.netloc:
            raise ConfigError(f"Can't parse URL: {self.target}")
        if not isinstance(self.threads, int) or self.threads < 1:
            raise ConfigError(f"Thread count must be at least 1 (got {self.threads})")
        if not isinstance(self.max_depth, int) or self.max_depth < 0:
            raise ConfigError(f"Recursion depth must be non-negative (got {self.max_depth})")
        if self.timeout is None or self.timeout <= 0:
            raise ConfigError(f"Request timeout must be positive (got {self.timeout})")
        if self.method.upper() not in SUPPORTED_METHODS:
            raise ConfigError(
                f"Unsupported method: {self.method}. Supported: {', '.join(SUPPORTED_METHODS)}"
            )
        if self.directory_heuristic not in DIRECTORY_HEURISTICS:
            raise ConfigError(
                f"Unknown directory heuristic: {self.directory_heuristic}. "
                f"Supported: {', '.join(DIRECTORY_HEURISTICS)}"
            )
        bad_codes = [code for code in self.include_status if not 100 <= code <= 599]
        if bad_codes:
            raise ConfigError(f"Invalid status code(s): {', '.join(map(str, bad_codes))}")
        if self.queue_size is not None and self.queue_size < self.threads:
            raise ConfigError(
                f"Queue size ({self.queue_size}) must be at least the thread count ({self.threads})"
            )
        if self.proxy:
            parts = urlsplit(self.proxy)
            if parts.scheme not in {"http", "https", "socks5"} or not parts.hostname:
                raise ConfigError(f"Can't parse proxy URL: {self.proxy}")


@dataclass(frozen=True)
class ProgressSnapshot:
    """Point-in-time scan counters handed to progress reporters."""

    issued: int
    completed: int
    found: int
    errors: int = 0
    queued: int = 0


@dataclass
class ScanSummary:
    """Final state of a scan once termination is declared."""

    target: str
    issued: int = 0
    completed: int = 0
    counts: dict[Verdict, int] = field(default_factory=lambda: {v: 0 for v in Verdict})
    findings: list[ProbeResult] = field(default_factory=list)
    expanded: list[str] = field(default_factory=list)
    max_depth_reached: int = 0
    max_queue_size: int = 0
    elapsed: float = 0.0
    cancelled: bool = False
    output_incomplete: bool = False

    @property
    def found(self) -> int:
        """Reported hits: Found plus Redirect, matching progress snapshots."""
        return self.counts[Verdict.FOUND] + self.counts[Verdict.REDIRECT]

    @property
    def errors(self) -> int:
        return self.counts[Verdict.ERROR]
