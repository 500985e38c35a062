"""Core game state data structures for Corporate Combat."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from .ai.difficulty import Difficulty
from .cards import Card
from .deck import DEFAULT_HAND_SIZE, deal, sort_hand


class Actor(str, Enum):
    """The two seats at the table."""

    PLAYER = "player"
    AI = "ai"

    @property
    def opponent(self) -> "Actor":
        return Actor.AI if self is Actor.PLAYER else Actor.PLAYER


class GameStatus(str, Enum):
    """Outcome from the human player's point of view."""

    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class TurnPhase(str, Enum):
    """Phases that track the active actor's progress through a turn."""

    AWAITING_DRAW = "awaiting_draw"
    AWAITING_DISCARD = "awaiting_discard"
    COMPLETE = "complete"


@dataclass(slots=True)
class GameConfig:
    """Runtime configuration for a single game."""

    hand_size: int = DEFAULT_HAND_SIZE
    ai_difficulty: Difficulty = Difficulty.MEDIUM
    ai_turn_delay: float = 1.0
    enable_purge: bool = False
    seed: int | None = None


@dataclass(slots=True)
class GameState:
    """Mutable table state; the four card containers partition the deck."""

    player_hand: list[Card] = field(default_factory=list)
    ai_hand: list[Card] = field(default_factory=list)
    draw_pile: list[Card] = field(default_factory=list)
    discard_pile: list[Card] = field(default_factory=list)
    current_turn: Actor = Actor.PLAYER
    game_status: GameStatus = GameStatus.PLAYING
    phase: TurnPhase = TurnPhase.AWAITING_DRAW
    last_discards: dict[Actor, Card] = field(default_factory=dict)
    config: GameConfig = field(default_factory=GameConfig)
    id: int | None = None

    def hand(self, actor: Actor) -> list[Card]:
        """Return the live hand list owned by ``actor``."""

        return self.player_hand if actor is Actor.PLAYER else self.ai_hand

    def set_hand(self, actor: Actor, cards: Sequence[Card]) -> None:
        if actor is Actor.PLAYER:
            self.player_hand = list(cards)
        else:
            self.ai_hand = list(cards)

    @property
    def top_discard(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def is_over(self) -> bool:
        return self.game_status is not GameStatus.PLAYING

    def all_cards(self) -> list[Card]:
        """Return every card held in any container."""

        return [*self.draw_pile, *self.player_hand, *self.ai_hand, *self.discard_pile]

    def clone(self) -> "GameState":
        """Return a copy whose containers can be mutated independently."""

        return GameState(
            player_hand=list(self.player_hand),
            ai_hand=list(self.ai_hand),
            draw_pile=list(self.draw_pile),
            discard_pile=list(self.discard_pile),
            current_turn=self.current_turn,
            game_status=self.game_status,
            phase=self.phase,
            last_discards=dict(self.last_discards),
            config=self.config,
            id=self.id,
        )


def deal_new_game(config: GameConfig, deck_cards: Sequence[Card]) -> GameState:
    """Deal a fresh game returning an initialised ``GameState``."""

    dealt = deal(deck_cards, config.hand_size)
    return GameState(
        player_hand=sort_hand(dealt.player_hand),
        ai_hand=sort_hand(dealt.ai_hand),
        draw_pile=dealt.draw_pile,
        discard_pile=[],
        current_turn=Actor.PLAYER,
        game_status=GameStatus.PLAYING,
        phase=TurnPhase.AWAITING_DRAW,
        config=config,
    )
