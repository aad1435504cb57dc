"""Main CLI application entry point."""

from pathlib import Path
from typing import Optional

import httpx
import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from ..api import create_app
from ..utils import settings, get_logger, setup_logging
from .commands import config, review

setup_logging(
    level=settings.log_level,
    log_file=Path.home() / ".swipe_triage" / "swipe_triage.log" if settings.debug else None
)

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="swipe-triage",
    help="Swipe Triage - send or flag Gmail drafts one card at a time",
    rich_markup_mode="rich",
)

app.add_typer(config.app, name="config", help="Configuration management")
app.command("review")(review.review)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode"),
) -> None:
    """Swipe Triage - send or flag Gmail drafts one card at a time"""
    if debug:
        setup_logging(level="DEBUG", log_file=Path.home() / ".swipe_triage" / "debug.log")
    elif verbose:
        setup_logging(level="DEBUG")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on"),
) -> None:
    """Run the OAuth/Gmail gateway."""
    host = host or settings.host
    port = port or settings.port

    console.print(f"\n[bold blue]🚀 Gateway running on http://{host}:{port}[/bold blue]")
    console.print("📧 Swipe Triage backend ready!\n")
    uvicorn.run(create_app(), host=host, port=port, log_config=None)


@app.command()
def status(
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Gateway base URL"),
) -> None:
    """Show gateway reachability and configuration status."""
    base_url = api_url or settings.api_base_url
    console.print("\n[bold blue]Swipe Triage Status[/bold blue]\n")

    try:
        response = httpx.get(f"{base_url}/health", timeout=settings.request_timeout)
        gateway_status = "✅ Reachable" if response.status_code == 200 else f"❌ HTTP {response.status_code}"
    except httpx.HTTPError as e:
        gateway_status = f"❌ Unreachable: {str(e)}"

    config_items = [
        ("Gateway", f"{base_url} - {gateway_status}"),
        ("OAuth Client", "✅ Configured" if settings.google_client_id else "❌ GOOGLE_CLIENT_ID not set"),
        ("Review Label", settings.review_label_name),
        ("Debug Mode", "✅ Enabled" if settings.debug else "❌ Disabled"),
        ("Log Level", settings.log_level),
    ]

    table = Table(title="Configuration Status", show_header=True)
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="green")

    for item, item_status in config_items:
        table.add_row(item, item_status)

    console.print(table)


if __name__ == "__main__":
    app()
