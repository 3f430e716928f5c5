"""Lazy wordlist reader."""

from collections.abc import Iterator
from pathlib import Path

from .models import ConfigError


class Wordlist:
    """Re-iterable, forward-only view of a wordlist file.

    Each iteration reopens the file and streams one word per line, so the
    whole list is never held in memory.
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding
        if not self.path.exists():
            raise ConfigError(f"File not found: {self.path}")
        if not self.path.is_file():
            raise ConfigError(f"Not a file: {self.path}")

    def __iter__(self) -> Iterator[str]:
        with open(self.path, encoding=self.encoding, errors="replace") as f:
            for line in f:
                word = line.strip()
                if not word or word.startswith("#"):
                    continue
                yield word

    def __repr__(self) -> str:
        return f"Wordlist({str(self.path)!r})"

    def count(self) -> int:
        """Number of usable words (reads the whole file once)."""
        return sum(1 for _ in self)
