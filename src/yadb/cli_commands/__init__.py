"""Command implementations registered on the shared Typer app."""
