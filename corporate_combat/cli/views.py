"""Composable view primitives for the Corporate Combat CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card
from ..portfolio import find_portfolio
from ..state import Actor, GameState, GameStatus

_STATUS_MARKUP = {
    GameStatus.PLAYING: "[cyan]Playing[/cyan]",
    GameStatus.WON: "[bold green]You won[/bold green]",
    GameStatus.LOST: "[bold red]AI won[/bold red]",
}


@dataclass(slots=True)
class StateSummaryView:
    """Renderable summarising the current table state."""

    state: GameState
    reveal_ai: bool
    card_formatter: Callable[[Card], str]

    def _hand_markup(self, cards: Sequence[Card], visible: bool) -> str:
        if not visible:
            return f"{len(cards)} cards"
        if not cards:
            return "—"
        return " ".join(self.card_formatter(card) for card in cards)

    def _metadata_panel(self) -> Panel:
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Status[/cyan]: {_STATUS_MARKUP[self.state.game_status]}")
        grid.add_row(f"[cyan]Draw pile[/cyan]: {len(self.state.draw_pile)} card(s)")
        top = self.state.top_discard
        if top is not None:
            grid.add_row(
                f"[cyan]Discard[/cyan]: {self.card_formatter(top)} ({len(self.state.discard_pile)} card(s))"
            )
        else:
            grid.add_row("[cyan]Discard[/cyan]: —")
        return Panel(grid, title="Table State", box=box.SQUARE, border_style="blue")

    def render(self) -> RenderableType:
        table = Table(box=box.ROUNDED, expand=True)
        table.add_column("Seat", justify="left", style="bold")
        table.add_column("Hand", justify="left")
        table.add_column("Phase", justify="left")

        for actor in Actor:
            hand = self.state.hand(actor)
            visible = actor is Actor.PLAYER or self.reveal_ai or self.state.is_over
            name = "You" if actor is Actor.PLAYER else "AI"
            if actor is self.state.current_turn and not self.state.is_over:
                name = f"[bold yellow]{name}[/bold yellow]"
                phase = self.state.phase.value.replace("_", " ").title()
            else:
                phase = ""
            table.add_row(name, self._hand_markup(hand, visible), phase)

        components: list[RenderableType] = [table, self._metadata_panel()]

        if self.state.is_over:
            winner = Actor.PLAYER if self.state.game_status is GameStatus.WON else Actor.AI
            portfolio = find_portfolio(self.state.hand(winner))
            if portfolio is not None:
                components.append(
                    Panel(
                        f"{portfolio.four_department.value} ×4 + {portfolio.three_department.value} ×3",
                        title="Career Portfolio",
                        box=box.SQUARE,
                        border_style="green",
                    )
                )
        return Group(*components)
