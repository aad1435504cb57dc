"""Configuration management CLI commands."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ...utils import settings, retrieve_secret, store_secret
from ...utils.logger import get_logger
from ...utils.security import CLIENT_SECRET_KEY, delete_secret

logger = get_logger(__name__)
console = Console()

app = typer.Typer(help="Configuration management")

ENV_TEMPLATE = """# Swipe Triage Configuration
# Google OAuth2 client (Google Cloud Console, "Web application" type)
GOOGLE_CLIENT_ID=your_google_client_id_here
GOOGLE_CLIENT_SECRET=your_google_client_secret_here
GOOGLE_REDIRECT_URI=http://localhost:3001/auth/google/callback

# Gateway
PORT=3001
CLIENT_URL=http://localhost:5173
SESSION_TTL=86400

# Labels
REVIEW_LABEL_NAME=Review
FLAGGED_LABEL_NAME=Flagged

# Application Settings
DEBUG=false
LOG_LEVEL=INFO
"""


@app.command()
def show() -> None:
    """Show current configuration (without sensitive values)."""

    console.print("\n[bold blue]📋 Swipe Triage Configuration[/bold blue]\n")

    config_table = Table(title="Configuration Settings")
    config_table.add_column("Setting", style="cyan")
    config_table.add_column("Value", style="green")
    config_table.add_column("Source", style="yellow")

    config_table.add_row(
        "Google Client ID",
        "✅ Set" if settings.google_client_id else "❌ Not set",
        "Config",
    )

    if settings.google_client_secret:
        config_table.add_row("Google Client Secret", "✅ Set", "Config")
    elif retrieve_secret(CLIENT_SECRET_KEY):
        config_table.add_row("Google Client Secret", "✅ Set", "Keyring")
    else:
        config_table.add_row("Google Client Secret", "❌ Not set", "Not configured")

    config_table.add_row("Redirect URI", settings.google_redirect_uri, "Config")
    config_table.add_row("Gateway", f"{settings.host}:{settings.port}", "Config")
    config_table.add_row("Client URL", settings.client_url, "Config")
    config_table.add_row("API Base URL", settings.api_base_url, "Config")
    config_table.add_row("Review Label", settings.review_label_name, "Config")
    config_table.add_row("Flagged Label", settings.flagged_label_name, "Config")
    config_table.add_row("Swipe Threshold", str(settings.swipe_threshold), "Config")
    config_table.add_row("Debug Mode", "✅ Enabled" if settings.debug else "❌ Disabled", "Config")
    config_table.add_row("Log Level", settings.log_level, "Config")

    console.print(config_table)


@app.command("set-secret")
def set_secret() -> None:
    """Store the Google client secret in the system keyring."""

    value = typer.prompt("Google client secret", hide_input=True)
    if store_secret(CLIENT_SECRET_KEY, value):
        console.print("[bold green]✅ Securely stored the client secret[/bold green]")
    else:
        console.print("[bold red]❌ Failed to store the client secret[/bold red]")
        raise typer.Exit(code=1)


@app.command("delete-secret")
def delete_secret_command(
    confirm: bool = typer.Option(False, "--confirm", help="Skip confirmation prompt")
) -> None:
    """Remove the Google client secret from the system keyring."""

    if not confirm and not typer.confirm("Delete the stored client secret?"):
        console.print("Operation cancelled.")
        return

    if delete_secret(CLIENT_SECRET_KEY):
        console.print("[bold green]✅ Deleted the client secret from secure storage[/bold green]")
    else:
        console.print("[bold red]❌ Failed to delete the client secret (may not exist)[/bold red]")


@app.command()
def init() -> None:
    """Write a starter .env file in the current directory."""

    env_file = Path.cwd() / ".env"
    if env_file.exists():
        console.print(f"[yellow]⚠️  {env_file} already exists, leaving it untouched[/yellow]")
        return

    env_file.write_text(ENV_TEMPLATE)
    console.print(f"[green]✅ Created {env_file}[/green]")
    console.print("Fill in GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET before running the gateway.")
