"""Unified Rich theme and reusable UI helper functions for the CLI."""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.theme import Theme

from models.creation import ArtifactBundle, Creation

VERSE_THEME = Theme({
    "app.title": "bold",
    "success": "green",
    "warning": "yellow",
    "error": "red",
    "info": "blue",
    "muted": "dim",
    "accent": "cyan",
    "stat.label": "dim",
    "stat.value": "bold",
    "creation.id": "blue",
})


def get_console() -> Console:
    """Return a Console instance with the versecraft theme applied."""
    return Console(theme=VERSE_THEME)


def app_header(title: str = "versecraft") -> Rule:
    """Return a Rule element for the application header banner."""
    return Rule(title=f"[bold]{title}[/]", style="dim")


def command_panel(title: str, fields: dict[str, str]) -> Panel:
    """Return a Panel displaying command parameters.

    Args:
        title: Panel title (e.g. "Generate all").
        fields: Ordered dict of label -> value pairs.
    """
    lines = []
    for label, value in fields.items():
        lines.append(f"  [stat.label]{label}:[/] [stat.value]{value}[/]")
    body = "\n".join(lines)
    return Panel(body, title=f"[bold]{title}[/]", box=box.ROUNDED, border_style="dim", padding=(0, 2))


def success_panel(title: str, body: str) -> Panel:
    """Return a green-bordered Panel for success results."""
    return Panel(body, title=f"[success]{title}[/]", box=box.ROUNDED, border_style="green", padding=(0, 2))


def notice_panel(message: str, level: str = "warning") -> Panel:
    """Return a Panel for a warning or error notice."""
    return Panel(message, title=f"[{level}]{level.capitalize()}[/]", box=box.ROUNDED, border_style=level, padding=(0, 2))


def _bullets(items: list[str]) -> str:
    return "\n".join(f"  • {item}" for item in items) if items else "[muted]  (empty)[/]"


def bundle_panels(bundle: ArtifactBundle) -> list[Panel]:
    """Build one Panel per generated artifact, skipping none."""
    return [
        Panel(
            bundle.content or "[muted](empty)[/]",
            title=f"[bold]Content[/] [muted]({len(bundle.content)} chars)[/]",
            box=box.ROUNDED,
            border_style="dim",
            padding=(0, 2),
        ),
        Panel(_bullets(bundle.titles), title="[bold]Titles[/]", box=box.ROUNDED, border_style="dim"),
        Panel(bundle.description or "[muted](empty)[/]", title="[bold]Description[/]", box=box.ROUNDED, border_style="dim"),
        Panel(", ".join(bundle.tags) or "[muted](empty)[/]", title="[bold]Tags[/]", box=box.ROUNDED, border_style="dim"),
        Panel(bundle.cta or "[muted](empty)[/]", title="[bold]Call to action[/]", box=box.ROUNDED, border_style="dim"),
        Panel(bundle.thumbnail_prompt or "[muted](empty)[/]", title="[bold]Thumbnail prompt[/]", box=box.ROUNDED, border_style="dim"),
    ]


def history_table(creations: list[Creation]) -> Table:
    """Build a Rich Table listing saved creations, newest first."""
    from datetime import datetime

    table = Table(title="History", show_lines=True, border_style="dim")
    table.add_column("ID", style="creation.id")
    table.add_column("Name", style="bold")
    table.add_column("Type", style="accent")
    table.add_column("Chars", justify="right")
    table.add_column("Created", style="muted")

    for c in creations:
        idea = c.params.name or c.params.main_prompt
        if len(idea) > 40:
            idea = idea[:40] + "..."
        created = datetime.fromtimestamp(c.created_at / 1000).strftime("%Y-%m-%d %H:%M")
        table.add_row(c.id, idea, c.params.creation_type.value, str(len(c.bundle.content)), created)

    return table
