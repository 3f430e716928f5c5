"""Output sinks for reported probe results."""

import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .models import ConfigError, ProbeResult, Verdict


class ResultSink(ABC):
    """Append-only destination for formatted results.

    ``emit`` serializes writers so a record is never interleaved with another.
    """

    name: str = "sink"

    def __init__(self):
        self._lock = threading.Lock()

    def emit(self, result: ProbeResult) -> None:
        with self._lock:
            self.write(result)

    @abstractmethod
    def write(self, result: ProbeResult) -> None:
        """Write one fully formed record."""

    def close(self) -> None:
        """Flush and release resources."""


class ConsoleSink(ResultSink):
    """Print results to a rich console."""

    name = "console"

    _STYLES = {
        Verdict.FOUND: "cyan",
        Verdict.REDIRECT: "yellow",
        Verdict.NOT_FOUND: "dim",
        Verdict.ERROR: "red",
    }

    def __init__(self, console: Console | None = None):
        super().__init__()
        self.console = console or Console()

    def write(self, result: ProbeResult) -> None:
        style = self._STYLES[result.verdict]
        if result.verdict == Verdict.ERROR:
            self.console.print(
                f"Error while sending request to [{style}]{escape(result.url)}[/{style}]: "
                f"{escape(result.error or '')}"
            )
            return
        line = f"{result.method} {escape(result.url)} -> [{style}]{result.status}[/{style}]"
        if result.verdict == Verdict.REDIRECT and result.location:
            line += f" [dim]({escape(result.location)})[/dim]"
        self.console.print(line, highlight=False)


class FileSink(ResultSink):
    """Line-oriented text log of results."""

    name = "file"

    def __init__(self, path: str | Path, append: bool = False):
        super().__init__()
        self.path = Path(path)
        try:
            self._file = open(self.path, "a" if append else "w", encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Can't open output file {self.path}: {exc}") from None

    def write(self, result: ProbeResult) -> None:
        level = "ERROR" if result.verdict == Verdict.ERROR else "INFO"
        stamp = datetime.now().strftime("%H:%M:%S")
        if result.verdict == Verdict.ERROR:
            message = f"{result.url} -> {result.error_kind}: {result.error}"
        else:
            message = f"{result.url} -> {result.status}"
        self._file.write(f"[{stamp}] [{level}] {message}\n")
        self._file.flush()

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()


class MemorySink(ResultSink):
    """Keep results in a list."""

    name = "memory"

    def __init__(self):
        super().__init__()
        self.results: list[ProbeResult] = []

    def write(self, result: ProbeResult) -> None:
        self.results.append(result)
