"""Response classification and directory detection.

Directory detection is best-effort. The default ``redirect`` heuristic
trusts servers that answer ``/name`` with a redirect to ``/name/``; it
misses directories served without that redirect (false negatives) and
reports paths that redirect to a slash form for other reasons (false
positives). ``any`` recurses into every hit and is only bounded by the
recursion depth. ``slash`` relies on the wordlist marking directories
with a trailing slash.
"""

from collections.abc import Collection
from urllib.parse import urljoin, urlsplit

from .models import Candidate, Verdict

_DEFAULT_PORTS = {"http": 80, "https": 443}


def classify(
    status: int | None,
    include_status: Collection[int] = (),
    error: str | None = None,
) -> Verdict:
    """Map a status code (or transport failure) to a verdict."""
    if error is not None or status is None:
        return Verdict.ERROR
    if 200 <= status < 300:
        return Verdict.FOUND
    if 300 <= status < 400:
        return Verdict.REDIRECT
    if status == 404:
        return Verdict.NOT_FOUND
    if status in include_status:
        return Verdict.FOUND
    return Verdict.NOT_FOUND


def is_directory_like(
    candidate: Candidate,
    verdict: Verdict,
    heuristic: str = "redirect",
    location: str | None = None,
    final_url: str | None = None,
) -> bool:
    """Decide whether a probed candidate should be treated as a directory."""
    if verdict not in (Verdict.FOUND, Verdict.REDIRECT):
        return False
    if heuristic == "none":
        return False
    if heuristic == "any":
        return True
    if heuristic == "slash":
        return candidate.path.endswith("/")
    if heuristic == "redirect":
        if candidate.path.endswith("/"):
            return False
        expected = candidate.url + "/"
        if location and _same_resource(urljoin(candidate.url, location), expected):
            return True
        if final_url and _same_resource(final_url, expected):
            return True
        return False
    raise ValueError(f"Unknown directory heuristic: {heuristic}")


def _same_resource(left: str, right: str) -> bool:
    a, b = urlsplit(left), urlsplit(right)
    if a.scheme.lower() != b.scheme.lower():
        return False
    if (a.hostname or "").lower() != (b.hostname or "").lower():
        return False
    a_port = a.port or _DEFAULT_PORTS.get(a.scheme.lower())
    b_port = b.port or _DEFAULT_PORTS.get(b.scheme.lower())
    return a_port == b_port and a.path == b.path
