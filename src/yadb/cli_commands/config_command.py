"""Configuration CLI command."""

import typer

from yadb.modules.buster import ConfigError

from .deps import cli_module
from .shared import app, console


@app.command()
def config(
    action: str = typer.Argument("show", help="Action: show"),
    global_config: bool = typer.Option(
        False,
        "--global",
        help="Show the raw global config file instead of resolved defaults",
    ),
) -> None:
    """Show yadb configuration."""
    cli = cli_module()

    if action != "show":
        console.print(f"[red]Unknown action: {action}. Use 'show'.[/red]")
        raise typer.Exit(1)

    if global_config:
        config_data = cli.load_global_config()
        console.print(f"[bold]Global Configuration ({cli.get_global_config_path()}):[/bold]")
        if not config_data:
            console.print("[dim]No global config found.[/dim]")
            return

        import yaml

        console.print(yaml.dump(config_data, default_flow_style=False))
        return

    try:
        defaults = cli.get_scan_defaults()
    except ConfigError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1) from None

    console.print("[bold]Effective scan defaults:[/bold]")
    for key, value in defaults.items():
        shown = value if value is not None else "[dim]not set[/dim]"
        console.print(f"  {key}={shown}")
