"""Scan CLI command."""

import typer
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

from yadb.modules.buster import ConfigError, ConsoleSink, FileSink, ProgressSnapshot, ScanConfig

from .deps import cli_module
from .scan_helpers import (
    EXIT_CONFIG_ERROR,
    build_banner,
    build_summary_table,
    configure_logging,
    exit_code_for,
    normalize_verbose,
    parse_status_codes,
)
from .shared import app, console


@app.command()
def scan(
    uri: str = typer.Option(..., "--uri", "-u", help="Target URI"),
    wordlist: str = typer.Option(..., "--wordlist", "-w", help="Path to wordlist"),
    threads: int | None = typer.Option(None, "--threads", "-t", help="Number of threads"),
    recursion: int | None = typer.Option(
        None,
        "--recursion",
        "-r",
        help="Recursively scan discovered directories (recursion depth)",
    ),
    timeout: float | None = typer.Option(None, "--timeout", help="Timeout of request in seconds"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output file"),
    method: str | None = typer.Option(None, "--method", "-m", help="HTTP method: GET or HEAD"),
    status: str | None = typer.Option(
        None,
        "--status",
        "-s",
        help="Extra status codes to report as found (e.g. 401,403 or 500-503)",
    ),
    follow_redirects: bool = typer.Option(
        False,
        "--follow-redirects",
        help="Follow redirects instead of reporting them",
    ),
    report_errors: bool = typer.Option(
        False,
        "--report-errors",
        help="Report transport errors alongside findings",
    ),
    heuristic: str | None = typer.Option(
        None,
        "--heuristic",
        help="Directory detection: redirect, slash, any, none",
    ),
    queue_size: int | None = typer.Option(
        None,
        "--queue-size",
        help="Maximum queued candidates before producers block",
    ),
    proxy: str | None = typer.Option(None, "--proxy", help="HTTP(S) proxy URL"),
    user_agent: str | None = typer.Option(None, "--user-agent", help="User-Agent header"),
    verify_tls: bool = typer.Option(
        False,
        "--verify-tls",
        help="Verify TLS certificates",
    ),
    progress_bar: bool = typer.Option(
        True,
        "--progress/--no-progress",
        help="Show a live progress bar",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine activity"),
    debug: bool = typer.Option(False, "--debug", help="Log every probe"),
) -> None:
    """Brute-force directories and files on a target."""
    cli = cli_module()
    configure_logging(normalize_verbose(verbose), debug)

    try:
        defaults = cli.get_scan_defaults()
        config = ScanConfig(
            target=uri,
            threads=threads if threads is not None else defaults["threads"],
            max_depth=recursion if recursion is not None else defaults["max_depth"],
            timeout=timeout if timeout is not None else defaults["timeout"],
            method=(method or defaults["method"]).upper(),
            follow_redirects=follow_redirects,
            include_status=parse_status_codes(status),
            report_errors=report_errors,
            directory_heuristic=(heuristic or defaults["directory_heuristic"]).lower(),
            queue_size=queue_size,
            user_agent=user_agent or defaults["user_agent"] or f"yadb/{cli.get_version()}",
            proxy=proxy or defaults["proxy"],
            verify_tls=verify_tls,
            output=output,
        )
        config.validate()
        words = cli.Wordlist(wordlist)
    except ConfigError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(EXIT_CONFIG_ERROR) from None

    console.print(build_banner(config, wordlist))

    progress = Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("[green]{task.fields[found]} found"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
        disable=not progress_bar,
    )
    task_id = progress.add_task("scanning", total=None, found=0)

    def on_progress(snapshot: ProgressSnapshot) -> None:
        progress.update(
            task_id,
            total=snapshot.issued,
            completed=snapshot.completed,
            found=snapshot.found,
        )

    sinks = [ConsoleSink(progress.console)]
    try:
        if config.output:
            sinks.append(FileSink(config.output))
        engine = cli.ScanEngine(config, words, sinks=sinks, progress=on_progress)
    except ConfigError as exc:
        for sink in sinks:
            sink.close()
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(EXIT_CONFIG_ERROR) from None

    with progress:
        summary = engine.run()

    console.print(build_summary_table(summary))
    if summary.cancelled:
        console.print("[yellow]Scan cancelled; results are partial.[/yellow]")
    if summary.output_incomplete:
        console.print(
            "[yellow]Some output could not be written; the output may be incomplete.[/yellow]"
        )
    code = exit_code_for(summary)
    if code:
        raise typer.Exit(code)
