"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from rich.console import RenderableType
from rich.panel import Panel

from ..cards import Card, Department, card_label, is_purge_card
from ..state import GameState
from .views import StateSummaryView

_DEPARTMENT_COLORS = {
    Department.DEV: "cyan",
    Department.HRA: "green",
    Department.MKT: "magenta",
    Department.FIN: "yellow",
}


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    if card.is_universal:
        return f"[bold white on blue]{card_label(card)}[/bold white on blue]"
    color = _DEPARTMENT_COLORS.get(card.department, "white")
    label = card_label(card)
    if is_purge_card(card):
        return f"[bold {color}]{label}![/bold {color}]"
    return f"[{color}]{label}[/{color}]"


def render_state(
    state: GameState,
    *,
    reveal_ai: bool = False,
    title: str = "Corporate Combat",
) -> RenderableType:
    """Return a Rich panel describing the current table state."""

    view = StateSummaryView(state=state, reveal_ai=reveal_ai, card_formatter=format_card)
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")
