"""Main CLI entry point for relay-gateway."""

import logging

import typer
from rich.console import Console

from relay.cli.commands import config, providers, start

app = typer.Typer(
    name="relay",
    help="Relay Gateway CLI - run and inspect the chat gateway",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="start", help="Start the gateway server")(start.start)
app.command(name="providers", help="List the provider catalog")(providers.providers)
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    from relay import __version__

    console = Console()
    console.print(f"[bold cyan]relay[/bold cyan] version [green]{__version__}[/green]")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Relay Gateway CLI."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


if __name__ == "__main__":
    app()
