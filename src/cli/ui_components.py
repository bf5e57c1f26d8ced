"""Rich UI components for the CLI.

Kept apart from the commands so tables and panels can be reused.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import WizardInitialData


def print_banner(console: Console) -> None:
    title = Text("vm-links", style="bold cyan")
    subtitle = Text("Wizard links • URL shortening • Redirects", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_link_panel(link: str, *, title: str = "Link") -> Panel:
    """Panel showing a single path or URL without wrapping it."""

    return Panel(Text(link, style="bold magenta", overflow="fold"), title=title, border_style="magenta")


def build_initial_data_table(data: WizardInitialData) -> Table:
    """One row per populated field, wire names on the left."""

    table = Table(title="Wizard initial data")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    wire = data.to_wire()
    source = wire.pop("source", None)
    for key, value in wire.items():
        table.add_row(key, str(value))
    if source:
        for key, value in source.items():
            table.add_row(f"source.{key}", str(value))
    if not wire and not source:
        table.add_row("(empty)", "-", style="dim")
    return table
