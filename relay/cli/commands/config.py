"""Configuration commands for the relay CLI."""

import typer
from rich.console import Console
from rich.table import Table

from relay.core.config import Config, validate_all
from relay.core.config.schema import ConfigSchema

app = typer.Typer(help="Configuration management")

# Values of these variables are never printed.
_SECRET_SUFFIX = "_API_KEY"


def _display(name: str, value: object) -> str:
    if value is None or value == "":
        return "[dim]<not set>[/dim]"
    if name.endswith(_SECRET_SUFFIX):
        return "[dim]<set>[/dim]"
    if isinstance(value, tuple):
        return ", ".join(value)
    return str(value)


@app.command()
def show() -> None:
    """Show the effective configuration."""
    console = Console()
    settings = Config()

    table = Table(title="Relay Gateway Configuration")
    table.add_column("Variable", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Description", style="dim")

    for name, spec in sorted(ConfigSchema.all_specs().items()):
        table.add_row(name, _display(name, settings.get(name)), spec.description)

    console.print(table)
    console.print(f"/v1 API key: {settings.api_key_hash}")


@app.command()
def validate() -> None:
    """Validate environment variables against the schema."""
    console = Console()
    errors = validate_all()

    if not errors:
        console.print("[green]✅ Configuration is valid[/green]")
        return

    for error in errors:
        console.print(f"[red]❌ {error.env_var}[/red]: {error.message}")
    raise typer.Exit(1)
