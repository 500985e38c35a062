"""Helpers for tracking results across a run of Corporate Combat games."""

from __future__ import annotations

from dataclasses import dataclass, field

from .portfolio import find_portfolio
from .state import Actor, GameState, GameStatus

__all__ = ["GameSummary", "ActorTotal", "MatchHistory", "summarize_game"]


@dataclass(frozen=True, slots=True)
class GameSummary:
    """Outcome of one finished (or abandoned) game."""

    game_number: int
    winner: Actor | None
    turns: int
    portfolio: tuple[str, str] | None = None


@dataclass(frozen=True, slots=True)
class ActorTotal:
    """Aggregate results for one seat."""

    actor: Actor
    wins: int
    win_turns: int

    @property
    def mean_turns_to_win(self) -> float:
        return self.win_turns / self.wins if self.wins else 0.0


@dataclass(slots=True)
class MatchHistory:
    """Mutable tracker that accumulates game summaries for a session."""

    games: list[GameSummary] = field(default_factory=list)
    _wins: dict[Actor, int] = field(init=False, repr=False)
    _win_turns: dict[Actor, int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._wins = {actor: 0 for actor in Actor}
        self._win_turns = {actor: 0 for actor in Actor}

    def record(self, summary: GameSummary) -> None:
        """Record ``summary`` and update cumulative totals."""

        if summary.turns < 0:
            raise ValueError("turn count cannot be negative")
        self.games.append(summary)
        if summary.winner is not None:
            self._wins[summary.winner] += 1
            self._win_turns[summary.winner] += summary.turns

    @property
    def unfinished(self) -> int:
        return sum(1 for game in self.games if game.winner is None)

    def totals(self) -> list[ActorTotal]:
        """Return the cumulative totals, player seat first."""

        return [
            ActorTotal(actor=actor, wins=self._wins[actor], win_turns=self._win_turns[actor])
            for actor in Actor
        ]


def summarize_game(state: GameState, game_number: int, turns: int) -> GameSummary:
    """Build a ``GameSummary`` from the final ``state`` of a game."""

    if state.game_status is GameStatus.WON:
        winner: Actor | None = Actor.PLAYER
    elif state.game_status is GameStatus.LOST:
        winner = Actor.AI
    else:
        winner = None

    portfolio = None
    if winner is not None:
        found = find_portfolio(state.hand(winner))
        if found is not None:
            portfolio = (found.four_department.value, found.three_department.value)
    return GameSummary(game_number=game_number, winner=winner, turns=turns, portfolio=portfolio)
