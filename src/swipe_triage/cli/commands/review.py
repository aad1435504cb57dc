"""Interactive terminal triage of drafts awaiting review."""

import asyncio
import webbrowser
from typing import Optional

import typer
from rich.console import Console

from ..render import render_card, render_empty_state, render_header, render_toast
from ...client import Direction, TriageApiClient, TriageController
from ...utils import get_logger, settings

logger = get_logger(__name__)
console = Console()

HELP_TEXT = (
    "[dim]s[/dim] send · [dim]f[/dim] flag · "
    "[dim]<number>[/dim] drag the card (e.g. 150 or -120) · "
    "[dim]r[/dim] refresh · [dim]l[/dim] logout · [dim]q[/dim] quit"
)


def draw(controller: TriageController) -> None:
    console.clear()
    console.print(render_header(controller.remaining))
    console.print()

    draft = controller.current_draft
    if draft is not None:
        console.print(render_card(draft, controller.gesture, settings.body_preview_length))
    else:
        console.print(render_empty_state(settings.review_label_name))

    toast = controller.toasts.current
    if toast:
        console.print(render_toast(toast))
    console.print(HELP_TEXT)


async def sign_in(controller: TriageController, open_browser: bool, timeout: float) -> bool:
    url = await controller.start_login()
    if not url:
        console.print("[red]Could not get a sign-in link from the gateway.[/red]")
        return False

    console.print("\n[bold blue]Sign in with Google[/bold blue]\n")
    console.print(f"Open this link to grant access:\n[link={url}]{url}[/link]\n")
    if open_browser:
        webbrowser.open(url)

    with console.status("[bold green]Waiting for sign-in..."):
        signed_in = await controller.wait_for_login(timeout)

    if not signed_in:
        console.print("[red]Timed out waiting for sign-in.[/red]")
    return signed_in


async def run_review(base_url: str, open_browser: bool, login_timeout: float) -> None:
    async with TriageApiClient(base_url=base_url) as api:
        controller = TriageController(api)

        if not await controller.check_auth():
            if not await sign_in(controller, open_browser, login_timeout):
                return

        with console.status("[bold green]Fetching drafts..."):
            await controller.refresh()

        while True:
            draw(controller)
            choice = console.input("[bold]> [/bold]").strip().lower()

            if choice == "q":
                break
            elif choice == "r":
                with console.status("[bold green]Fetching drafts..."):
                    await controller.refresh()
            elif choice == "l":
                await controller.logout()
                console.print("👋 Signed out.")
                break
            elif choice == "s":
                with console.status("[bold green]Sending..."):
                    await controller.handle_swipe(Direction.RIGHT)
            elif choice == "f":
                with console.status("[bold yellow]Flagging..."):
                    await controller.handle_swipe(Direction.LEFT)
            else:
                try:
                    offset = float(choice)
                except ValueError:
                    continue
                with console.status("[bold green]Working..."):
                    await controller.release_card(offset)


def review(
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Gateway base URL"),
    open_browser: bool = typer.Option(True, "--browser/--no-browser", help="Open the sign-in link automatically"),
    login_timeout: float = typer.Option(300.0, "--login-timeout", help="Seconds to wait for sign-in"),
) -> None:
    """Review drafts one card at a time: send or flag each."""
    try:
        asyncio.run(run_review(api_url or settings.api_base_url, open_browser, login_timeout))
    except KeyboardInterrupt:
        console.print("\nBye!")
    except Exception as e:
        console.print(f"\n[red]Review failed: {str(e)}[/red]")
        logger.error(f"Review session failed: {e}")
        raise typer.Exit(code=1)
