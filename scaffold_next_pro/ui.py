"""Banner and closing messages."""

from __future__ import annotations

from rich.align import Align
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from scaffold_next_pro.utils import console


def show_intro() -> None:
    title = Text("scaffold-next-pro", style="bold white")
    subtitle = Text("Production-ready Next.js 15 scaffolding tool", style="cyan")
    console.print(
        Panel(
            Align.center(Text.assemble(title, "\n\n", subtitle)),
            border_style="bold cyan",
            padding=(1, 4),
        )
    )


def show_success(project_name: str, package_manager: str = "yarn") -> None:
    """Print the next steps for the freshly generated project."""
    console.print()
    console.print(
        Panel(
            "Run the following commands to get started:\n\n"
            f"  [cyan]cd {escape(project_name)}[/cyan]\n"
            f"  [cyan]{package_manager} dev[/cyan]",
            title="Project ready!",
            border_style="green",
        )
    )
    console.print()


def show_cancelled() -> None:
    console.print("[yellow]Operation cancelled.[/yellow]")
