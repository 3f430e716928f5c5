"""Shared CLI app objects."""

import typer
from rich.console import Console

app = typer.Typer(
    name="yadb",
    help="Yet Another Directory Buster - concurrent directory/file brute-forcing",
    no_args_is_help=True,
)
console = Console()
