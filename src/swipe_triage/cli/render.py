"""Rich renderables for the terminal triage screen."""

from typing import Optional

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..client.gesture import CardGesture, Direction
from ..client.notifications import Toast, ToastKind
from ..core.draft_parser import DraftRecord, format_body

TOAST_STYLES = {
    ToastKind.SUCCESS: "bold white on green",
    ToastKind.ERROR: "bold white on red",
    ToastKind.WARNING: "bold black on yellow",
    ToastKind.INFO: "bold white on blue",
}


def remaining_label(remaining: int) -> str:
    if remaining <= 0:
        return ""
    return f"{remaining} draft{'s' if remaining != 1 else ''} remaining"


def render_header(remaining: int) -> Table:
    header = Table.grid(expand=True)
    header.add_column(justify="left")
    header.add_column(justify="center")
    header.add_column(justify="right")
    header.add_row(
        "💌 [bold]Swipe Triage[/bold]",
        f"[cyan]{remaining_label(remaining)}[/cyan]",
        "[dim]r refresh · l logout · q quit[/dim]",
    )
    return header


def render_card(draft: DraftRecord, gesture: Optional[CardGesture] = None, preview_length: int = 500) -> Panel:
    """One draft as a card, with the swipe hint the drag leans toward."""
    details = Table.grid(padding=(0, 1))
    details.add_column(style="bold cyan")
    details.add_column()
    details.add_row("To:", draft.to or "No recipient")
    if draft.sender:
        details.add_row("From:", draft.sender)

    parsed = draft.parsed_date
    if parsed:
        details.add_row("Date:", parsed.strftime("%d %b %Y %H:%M"))

    subject = Text(draft.subject or "(No subject)", style="bold")
    body = Text(format_body(draft.body or draft.snippet or "No content", preview_length))

    hint = Text("👈 Flag for review (f)", style="yellow")
    hint.append("    ")
    hint.append("Send it! (s) 👉", style="green")

    border = "white"
    if gesture and gesture.indicator is Direction.RIGHT:
        border = "green"
    elif gesture and gesture.indicator is Direction.LEFT:
        border = "yellow"

    return Panel(
        Group(details, Text(""), subject, Text(""), body, Text(""), hint),
        border_style=border,
        title="✓ SEND" if border == "green" else ("🚩 FLAG" if border == "yellow" else None),
    )


def render_empty_state(review_label: str = "Review") -> Panel:
    instructions = Text.assemble(
        ("All caught up!\n\n", "bold"),
        f'No drafts with the "{review_label}" label found.\n\n',
        "To use this app:\n",
        f'  1. Create a label named "{review_label}" in Gmail\n',
        "  2. Add this label to drafts you want your assistant to review\n",
        "  3. Press r to load them here",
    )
    return Panel(instructions, title="📭", border_style="blue")


def render_toast(toast: Toast) -> Text:
    return Text(f" {toast.message} ", style=TOAST_STYLES.get(toast.kind, TOAST_STYLES[ToastKind.INFO]))
