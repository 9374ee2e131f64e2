"""Presenter for the provider catalog in the CLI."""

from rich.console import Console
from rich.table import Table

from relay.core.provider.provider_catalog_loader import ProviderLoadResult


class ProviderSummaryPresenter:
    """Render ProviderLoadResult rows with Rich. Presentation only."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def present(self, results: list[ProviderLoadResult]) -> None:
        table = Table(title="Provider Catalog (rotation order)")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Provider", style="cyan")
        table.add_column("Status")
        table.add_column("Models", style="green")
        table.add_column("Key", style="dim")

        position = 0
        for result in results:
            if result.status == "success":
                status = "[green]✅ active[/green]"
                index = str(position)
                position += 1
            else:
                status = f"[yellow]⚠️ {result.message}[/yellow]"
                index = "-"
            table.add_row(
                index,
                result.display_name,
                status,
                ", ".join(result.models),
                result.api_key_hash or "",
            )

        self.console.print(table)
