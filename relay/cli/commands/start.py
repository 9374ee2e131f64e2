"""Start command for the relay CLI."""

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from relay.core.config import config
from relay.core.logging import parse_log_level


def start(
    host: str = typer.Option(None, "--host", help="Override host"),
    port: int = typer.Option(None, "--port", help="Override port"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
) -> None:
    """Start the gateway server."""
    console = Console()

    server_host = host or config.host
    server_port = port or config.port

    table = Table(title="Relay Gateway Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Server URL", f"http://{server_host}:{server_port}")
    table.add_row("API Key", config.api_key_hash)
    table.add_row("Legacy /chat", "Enabled" if config.legacy_api_key else "Disabled (no RELAY_API_KEY)")
    table.add_row("Models", ", ".join(config.models))
    table.add_row("Providers", ", ".join(config.provider_order))
    table.add_row("Request Timeout", f"{config.request_timeout}s")

    console.print(table)

    uvicorn.run(
        "relay.main:app",
        host=server_host,
        port=server_port,
        reload=reload,
        log_level=parse_log_level(config.log_level).lower(),
    )
