"""Textual-powered interactive Corporate Combat board."""

from __future__ import annotations

import logging
from contextlib import suppress
from typing import Sequence, Union

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from textual import events, on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Footer, Header, OptionList, Static
from textual.widgets.option_list import Option

from ... import scoreboard
from ...actions import DiscardAction, DrawAction, legal_discard_actions, legal_draw_actions
from ...ai.policy import DrawSource
from ...cards import find_card
from ...session import AITurnReport, GameSession
from ...state import Actor, GameConfig, GameState, GameStatus, TurnPhase
from ..render import format_card, render_state

logger = logging.getLogger(__name__)

MAX_MEMOS = 18
SEAT_TAGS = {Actor.PLAYER: "[green]You[/green]", Actor.AI: "[red]AI[/red]"}
BOARD_TAG = "[bold cyan]Board[/bold cyan]"

Move = Union[DrawAction, DiscardAction]


class MemoFeed(Static):
    """Rolling feed of turn memos, newest last."""

    memos: reactive[tuple[str, ...]] = reactive((), init=False)

    def on_mount(self) -> None:  # pragma: no cover - widget lifecycle glue
        self.watch_memos(self.memos)

    def add_memo(self, text: str, actor: Actor | None = None) -> None:
        tag = SEAT_TAGS[actor] if actor is not None else BOARD_TAG
        self.memos = (*self.memos, f"{tag} {text}")[-MAX_MEMOS:]

    def watch_memos(self, memos: tuple[str, ...]) -> None:
        if memos:
            body = Text("\n").join(Text.from_markup(memo) for memo in memos)
        else:
            body = Text("No memos yet", style="dim")
        self.update(Panel(body, title="Memos", border_style="magenta"))


class ScorePanel(Static):
    """Displays wins per seat across the session."""

    def update_scores(self, history: scoreboard.MatchHistory) -> None:
        table = Table(box=box.SIMPLE_HEAVY, expand=True)
        table.add_column("Seat", justify="left")
        table.add_column("Wins", justify="right")
        table.add_column("Avg turns", justify="right")
        for entry in history.totals():
            label = "You" if entry.actor is Actor.PLAYER else "AI"
            table.add_row(label, str(entry.wins), f"{entry.mean_turns_to_win:.1f}")
        self.update(Panel(table, title=f"Games played: {len(history.games)}", border_style="bright_blue"))


def _headline(game_state: GameState) -> str:
    if game_state.game_status is GameStatus.WON:
        return "[bold green]I SUBMIT MY RESIGNATION™![/bold green] Press N to play again."
    if game_state.game_status is GameStatus.LOST:
        return "[bold red]The AI completed its Career Portfolio.[/bold red] Press N to play again."
    if game_state.current_turn is Actor.AI:
        return "[cyan]AI is thinking…[/cyan]"
    if game_state.phase is TurnPhase.AWAITING_DRAW:
        return "[yellow]Your turn[/yellow]: draw a card"
    return "[yellow]Your turn[/yellow]: choose a card to discard"


class TurnBanner(Static):
    """Names the seat to act and what it has to do next."""

    def announce(self, game_state: GameState) -> None:
        text = Text.from_markup(_headline(game_state))
        text.append(f"  draw pile {len(game_state.draw_pile)}", style="dim")
        self.update(Panel(text, border_style="green"))


class MovePicker(OptionList):
    """Legal moves for the player's current phase; number keys pick directly."""

    class Picked(Message):
        def __init__(self, picker: MovePicker, move: Move) -> None:
            super().__init__()
            self.picker = picker
            self.move = move

        @property
        def control(self) -> MovePicker:
            return self.picker

    def __init__(self, moves: Sequence[tuple[Move, str]]) -> None:
        super().__init__(
            *(Option(f"[bold]{number}[/bold] {label}") for number, (_, label) in enumerate(moves, start=1))
        )
        self.moves = [move for move, _ in moves]

    def on_mount(self) -> None:  # pragma: no cover - widget lifecycle glue
        if self.moves:
            self.highlighted = 0

    def pick(self, index: int) -> bool:
        if not 0 <= index < len(self.moves):
            return False
        self.post_message(self.Picked(self, self.moves[index]))
        return True

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:  # pragma: no cover - Textual glue
        event.stop()
        self.pick(event.option_index)

    def on_key(self, event: events.Key) -> None:  # pragma: no cover - driven by UI interaction
        if event.key.isdigit() and event.key != "0" and self.pick(int(event.key) - 1):
            self.highlighted = int(event.key) - 1
            event.stop()


def _draw_moves(session: GameSession, draws: Sequence[DrawAction]) -> list[tuple[Move, str]]:
    moves: list[tuple[Move, str]] = []
    for action in draws:
        if action.source is DrawSource.DECK:
            moves.append((action, "Draw from the deck"))
        else:
            top = session.state.top_discard
            moves.append((action, f"Take {format_card(top)} from the discard pile" if top else "Take discard"))
    return moves


def _discard_moves(session: GameSession, discards: Sequence[DiscardAction]) -> list[tuple[Move, str]]:
    moves: list[tuple[Move, str]] = []
    for action in discards:
        card = find_card(session.state.player_hand, action.card_id)
        label = format_card(card) if card is not None else action.card_id
        moves.append((action, f"Purge with {label}" if action.purge else f"Discard {label}"))
    return moves


class CorporateCombatApp(App):
    """Textual board for one human against the AI."""

    CSS = """
    Screen {
        layout: vertical;
        height: 100%;
    }

    #main {
        layout: horizontal;
        height: 1fr;
    }

    #left, #right {
        layout: vertical;
        width: 1fr;
        height: 1fr;
        padding: 0 1;
        overflow-y: auto;
    }

    MovePicker {
        border: heavy $accent;
        height: auto;
        max-height: 16;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("n", "new_game", "New game"),
        Binding("h", "toggle_reveal", "Reveal AI hand"),
    ]

    def __init__(self, config: GameConfig | None = None) -> None:
        super().__init__()
        self.session = GameSession(config)
        self.history = scoreboard.MatchHistory()
        self.reveal_ai = False
        self.turns = 0
        self._picker: MovePicker | None = None

        self.banner = TurnBanner(id="banner")
        self.table_panel = Static(id="table")
        self.moves_container = Vertical(id="moves")
        self.memo_feed = MemoFeed(id="memos")
        self.score_panel = ScorePanel(id="scores")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        yield self.banner
        yield Horizontal(
            Vertical(self.table_panel, self.moves_container, id="left"),
            Vertical(self.memo_feed, self.score_panel, id="right"),
            id="main",
        )
        yield Footer()

    async def on_mount(self) -> None:
        self.score_panel.update_scores(self.history)
        await self._start_game(new_deal=False)

    async def action_new_game(self) -> None:
        await self._start_game(new_deal=True)

    def action_toggle_reveal(self) -> None:
        self.reveal_ai = not self.reveal_ai
        self._refresh_table()

    async def _start_game(self, *, new_deal: bool) -> None:
        if new_deal:
            self.session.new_game()
        self.turns = 0
        self.memo_feed.add_memo(f"new game vs {self.session.ai.difficulty.value} AI")
        await self._advance()

    def _refresh_table(self) -> None:
        self.table_panel.update(render_state(self.session.state, reveal_ai=self.reveal_ai))
        self.title = f"Corporate Combat • Turn {self.turns + 1}"

    async def _advance(self) -> None:
        """Prompt the human or hand control to the AI based on the current state."""

        self._refresh_table()
        await self._drop_picker()
        game_state = self.session.state
        self.banner.announce(game_state)
        if game_state.is_over:
            self._finish_game()
            return
        if game_state.current_turn is Actor.AI:
            self.session.schedule_ai_turn(on_complete=self._on_ai_report)
            return

        draws = legal_draw_actions(game_state, Actor.PLAYER)
        if draws:
            await self._show_picker(_draw_moves(self.session, draws))
        else:
            await self._show_picker(_discard_moves(self.session, legal_discard_actions(game_state, Actor.PLAYER)))

    def _on_ai_report(self, report: AITurnReport) -> None:
        self.turns += 1
        if report.draw_source is DrawSource.DISCARD:
            self.memo_feed.add_memo(f"took {format_card(report.drawn)} from the discard pile", Actor.AI)
        else:
            self.memo_feed.add_memo("drew from the deck", Actor.AI)
        verb = "purged with" if report.purged else "discarded"
        self.memo_feed.add_memo(f"{verb} {format_card(report.discarded)}", Actor.AI)
        if report.purged:
            lost = " ".join(format_card(card) for card in report.purged)
            self.memo_feed.add_memo(f"[red]lost {lost}[/red]", Actor.PLAYER)
        self.run_worker(self._advance(), group="turns", exclusive=True)

    def _finish_game(self) -> None:
        self.history.record(scoreboard.summarize_game(self.session.state, len(self.history.games) + 1, self.turns))
        self.score_panel.update_scores(self.history)
        logger.info("game finished with status %s", self.session.state.game_status.value)

    async def _show_picker(self, moves: list[tuple[Move, str]]) -> None:
        picker = MovePicker(moves)
        self._picker = picker
        await self.moves_container.mount(picker)
        picker.focus()

    async def _drop_picker(self) -> None:
        picker, self._picker = self._picker, None
        if picker is not None:
            with suppress(LookupError):
                await picker.remove()

    @on(MovePicker.Picked)
    def _on_move_picked(self, message: MovePicker.Picked) -> None:
        message.stop()
        if message.control is not self._picker:
            return
        self.run_worker(self._play_move(message.move), group="turns", exclusive=True)

    async def _play_move(self, move: Move) -> None:
        if isinstance(move, DrawAction):
            result = self.session.player_draw(move.source)
            if result.ok and result.card is not None:
                self.memo_feed.add_memo(f"drew {format_card(result.card)}", Actor.PLAYER)
        else:
            result = self.session.player_discard(move.card_id, purge=move.purge)
            if result.ok:
                self.turns += 1
                if result.card is not None:
                    verb = "purged with" if move.purge else "discarded"
                    self.memo_feed.add_memo(f"{verb} {format_card(result.card)}", Actor.PLAYER)
        if not result.ok:
            self.notify(result.notice, severity="warning")
        await self._advance()


def run_textual_app(config: GameConfig | None = None) -> None:
    """Launch the Textual UI."""

    CorporateCombatApp(config).run()
