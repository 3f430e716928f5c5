"""Helpers for the scan CLI command."""

import logging
import os

from rich.panel import Panel
from rich.table import Table

from yadb.modules.buster import ConfigError, ScanConfig, ScanSummary, Verdict

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_OUTPUT_INCOMPLETE = 2
EXIT_CANCELLED = 130


def normalize_verbose(verbose: bool) -> bool:
    """Resolve effective verbose flag from CLI arg and env var."""
    effective = verbose if isinstance(verbose, bool) else False
    if effective:
        return True
    env_verbose = os.environ.get("YADB_VERBOSE", "").lower()
    return env_verbose in {"1", "true", "yes", "on"}


def configure_logging(verbose: bool, debug: bool) -> None:
    """Send engine logs to stderr when asked to."""
    if not (verbose or debug):
        return
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def parse_status_codes(raw: str | None) -> tuple[int, ...]:
    """Parse ``--status`` values such as ``401,403`` or ``500-503``."""
    if raw is None or not isinstance(raw, str) or not raw.strip():
        return ()
    codes: list[int] = []
    invalid: list[str] = []
    for item in raw.split(","):
        token = item.strip()
        if not token:
            continue
        try:
            if "-" in token:
                low, high = (int(part) for part in token.split("-", 1))
                if low > high:
                    raise ValueError(token)
                values = range(low, high + 1)
            else:
                values = [int(token)]
        except ValueError:
            invalid.append(token)
            continue
        for code in values:
            if not 100 <= code <= 599:
                invalid.append(str(code))
            elif code not in codes:
                codes.append(code)
    if invalid:
        raise ConfigError(f"Invalid status code(s): {', '.join(invalid)}")
    return tuple(codes)


def build_banner(config: ScanConfig, wordlist: str) -> Panel:
    """Startup banner listing the effective settings."""
    lines = [
        f"Threads: [cyan]{config.threads}[/cyan]",
        f"Recursion depth: [cyan]{config.max_depth}[/cyan]",
        f"Timeout: [cyan]{config.timeout:g}[/cyan] seconds",
        f"Method: [cyan]{config.method}[/cyan]",
        f"Wordlist path: [cyan]{wordlist}[/cyan]",
        f"Target: [cyan]{config.target}[/cyan]",
    ]
    if config.proxy:
        lines.append(f"Proxy: [cyan]{config.proxy}[/cyan]")
    if config.output:
        lines.append(f"Output: [cyan]{config.output}[/cyan]")
    return Panel("\n".join(lines), title="yadb", border_style="cyan")


def build_summary_table(summary: ScanSummary) -> Table:
    """Final per-verdict counts."""
    table = Table(title="Scan Summary", show_header=True, header_style="bold")
    table.add_column("Metric", style="bold white")
    table.add_column("Value", justify="right")
    table.add_row("Target", summary.target)
    table.add_row("Probed", f"{summary.completed}/{summary.issued}")
    table.add_row("Found", f"[green]{summary.counts[Verdict.FOUND]}[/green]")
    table.add_row("Redirect", f"[yellow]{summary.counts[Verdict.REDIRECT]}[/yellow]")
    table.add_row("Not found", f"[dim]{summary.counts[Verdict.NOT_FOUND]}[/dim]")
    table.add_row("Errors", f"[red]{summary.counts[Verdict.ERROR]}[/red]")
    table.add_row("Directories expanded", str(len(summary.expanded)))
    table.add_row("Elapsed", f"{summary.elapsed:.2f}s")
    return table


def exit_code_for(summary: ScanSummary) -> int:
    """Map a finished scan to the process exit status."""
    if summary.cancelled:
        return EXIT_CANCELLED
    if summary.output_incomplete:
        return EXIT_OUTPUT_INCOMPLETE
    return EXIT_OK
