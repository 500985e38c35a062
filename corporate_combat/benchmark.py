"""Benchmark harness pitting two heuristic difficulties against each other."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

import numpy as np

from . import scoreboard
from .ai.difficulty import Difficulty
from .ai.policy import GameAI
from .cards import create_deck
from .deck import shuffle
from .session import play_policy_turn
from .state import Actor, GameConfig, deal_new_game

__all__ = ["SeatBreakdown", "HeadToHeadReport", "play_game", "run_head_to_head"]

logger = logging.getLogger(__name__)

DEFAULT_TURN_LIMIT = 500


@dataclass(frozen=True, slots=True)
class SeatBreakdown:
    """Aggregate statistics for one difficulty across a benchmark."""

    difficulty: Difficulty
    wins: int
    mean_turns_to_win: float


@dataclass(frozen=True, slots=True)
class HeadToHeadReport:
    """Summary of a head-to-head benchmark between two difficulties."""

    history: scoreboard.MatchHistory
    baseline: SeatBreakdown
    challenger: SeatBreakdown
    mean_turns: float
    std_turns: float

    @property
    def unfinished(self) -> int:
        return self.history.unfinished


def play_game(
    game_number: int,
    agents: dict[Actor, GameAI],
    rng: random.Random,
    *,
    enable_purge: bool = False,
    turn_limit: int = DEFAULT_TURN_LIMIT,
) -> scoreboard.GameSummary:
    """Play one full AI-vs-AI game; games reaching ``turn_limit`` have no winner."""

    config = GameConfig(enable_purge=enable_purge)
    game_state = deal_new_game(config, shuffle(create_deck(), rng))
    turns = 0
    while not game_state.is_over and turns < turn_limit:
        actor = game_state.current_turn
        play_policy_turn(game_state, actor, agents[actor], rng)
        turns += 1
    if not game_state.is_over:
        logger.debug("game %d hit the turn limit", game_number)
    return scoreboard.summarize_game(game_state, game_number, turns)


def run_head_to_head(
    games: int,
    baseline: Difficulty | str,
    challenger: Difficulty | str,
    *,
    seed: int = 123,
    enable_purge: bool = False,
    turn_limit: int = DEFAULT_TURN_LIMIT,
) -> HeadToHeadReport:
    """Run a seeded benchmark, swapping seats every game."""

    if games <= 0:
        raise ValueError("games must be positive")

    baseline = Difficulty(baseline)
    challenger = Difficulty(challenger)
    rng = random.Random(seed)
    history = scoreboard.MatchHistory()
    wins = {"baseline": 0, "challenger": 0}
    win_turns: dict[str, list[int]] = {"baseline": [], "challenger": []}

    for game_number in range(1, games + 1):
        if game_number % 2 == 1:
            labels = {Actor.PLAYER: "baseline", Actor.AI: "challenger"}
        else:
            labels = {Actor.PLAYER: "challenger", Actor.AI: "baseline"}
        agents = {
            actor: GameAI(baseline if label == "baseline" else challenger, rng)
            for actor, label in labels.items()
        }
        summary = play_game(
            game_number, agents, rng, enable_purge=enable_purge, turn_limit=turn_limit
        )
        history.record(summary)
        if summary.winner is not None:
            label = labels[summary.winner]
            wins[label] += 1
            win_turns[label].append(summary.turns)

    turns = np.array([game.turns for game in history.games], dtype=np.float64)

    def _mean(values: list[int]) -> float:
        return float(np.mean(values)) if values else 0.0

    return HeadToHeadReport(
        history=history,
        baseline=SeatBreakdown(baseline, wins["baseline"], _mean(win_turns["baseline"])),
        challenger=SeatBreakdown(challenger, wins["challenger"], _mean(win_turns["challenger"])),
        mean_turns=float(turns.mean()),
        std_turns=float(turns.std()),
    )
