"""yadb CLI - concurrent directory/file brute-forcing."""

from yadb.cli_commands.shared import app, console
from yadb.config import get_global_config_path, get_scan_defaults, load_global_config
from yadb.modules.buster import ScanEngine, Wordlist

# Register commands on the shared Typer app.
from yadb.cli_commands import config_command as _config_command  # noqa: F401
from yadb.cli_commands import scan_command as _scan_command  # noqa: F401


def get_version() -> str:
    """Installed package version."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        return pkg_version("yadb")
    except PackageNotFoundError:
        return "0.0.0+unknown"


@app.command()
def version() -> None:
    """Show the installed yadb version."""
    console.print(f"yadb {get_version()}")


def main():
    """Entry point for the CLI."""
    app()


__all__ = [
    "ScanEngine",
    "Wordlist",
    "app",
    "get_global_config_path",
    "get_scan_defaults",
    "get_version",
    "load_global_config",
    "main",
]
