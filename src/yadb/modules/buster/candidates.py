"""Target parsing and candidate generation."""

import re
from collections.abc import Iterable, Iterator
from urllib.parse import urlsplit

from .models import Candidate, ConfigError, Target

_SLASH_RUN = re.compile(r"/{2,}")


def parse_target(uri: str) -> Target:
    """Parse and validate the scan's base URI."""
    if not isinstance(uri, str) or not uri.strip():
        raise ConfigError("Target not specified")
    try:
        parts = urlsplit(uri.strip())
        port = parts.port
    except ValueError as exc:
        raise ConfigError(f"Can't parse URL: {uri} ({exc})") from None
    if parts.scheme not in {"http", "https"}:
        raise ConfigError(f"Can't parse URL: {uri} (scheme must be http or https)")
    if not parts.hostname:
        raise ConfigError(f"Can't parse URL: {uri} (missing host)")

    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    base_path = normalize_path(parts.path or "/")
    if not base_path.endswith("/"):
        base_path += "/"
    return Target(scheme=parts.scheme, host=host, port=port, base_path=base_path)


def normalize_path(path: str) -> str:
    """Collapse duplicate slashes and ensure a leading slash."""
    collapsed = _SLASH_RUN.sub("/", path)
    return collapsed if collapsed.startswith("/") else "/" + collapsed


def join_path(prefix: str, word: str) -> str:
    """Join a directory prefix and a word into a relative path.

    A trailing slash on the word is preserved; leading slashes are dropped.
    """
    word = _SLASH_RUN.sub("/", word.strip()).lstrip("/")
    if prefix and not prefix.endswith("/"):
        prefix += "/"
    return _SLASH_RUN.sub("/", prefix + word)


def make_candidate(target: Target, path: str, depth: int = 0) -> Candidate:
    """Resolve a relative path against the target."""
    relative = _SLASH_RUN.sub("/", path).lstrip("/")
    return Candidate(url=target.url + relative, path=relative, depth=depth)


def iter_candidates(
    target: Target,
    words: Iterable[str],
    prefix: str = "",
    depth: int = 0,
) -> Iterator[Candidate]:
    """Lazily yield candidates for every word under the given prefix."""
    for word in words:
        if not word or not word.strip() or not word.strip("/"):
            continue
        yield make_candidate(target, join_path(prefix, word), depth=depth)
