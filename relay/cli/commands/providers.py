"""Provider catalog listing for the relay CLI."""

import typer
from rich.console import Console

from relay.cli.presenters.providers import ProviderSummaryPresenter
from relay.core.config import Config
from relay.core.provider.provider_catalog_loader import ProviderCatalogLoader


def providers() -> None:
    """Show which providers will join the rotation, in order."""
    console = Console()
    try:
        results = ProviderCatalogLoader(Config()).describe()
    except ValueError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from e

    ProviderSummaryPresenter(console).present(results)

    if not any(result.status == "success" for result in results):
        console.print("[red]❌ No provider has an API key; the gateway will not start[/red]")
        raise typer.Exit(1)
