"""Shuffling, dealing and pile maintenance helpers."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol, Sequence, TypeVar

from .cards import Card

T = TypeVar("T")

DEFAULT_HAND_SIZE = 7


class RandomSource(Protocol):
    """Minimal random interface consumed by shuffling and the AI.

    ``random.Random`` satisfies it; tests inject scripted implementations.
    """

    def random(self) -> float:  # pragma: no cover - protocol only
        ...

    def randrange(self, stop: int) -> int:  # pragma: no cover - protocol only
        ...


@dataclass(frozen=True, slots=True)
class Deal:
    """Result of dealing the opening hands."""

    player_hand: list[Card]
    ai_hand: list[Card]
    draw_pile: list[Card]


def shuffle(deck: Sequence[T], rng: RandomSource | None = None) -> list[T]:
    """Return a uniformly shuffled copy of ``deck`` (Fisher–Yates)."""

    source = rng if rng is not None else random.Random()
    shuffled = list(deck)
    for i in range(len(shuffled) - 1, 0, -1):
        j = source.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def deal(deck: Sequence[Card], hand_size: int = DEFAULT_HAND_SIZE) -> Deal:
    """Deal the first ``hand_size`` cards to the player and the next to the AI."""

    if len(deck) < hand_size * 2:
        raise ValueError("insufficient cards in deck for requested hand size")
    return Deal(
        player_hand=list(deck[:hand_size]),
        ai_hand=list(deck[hand_size : hand_size * 2]),
        draw_pile=list(deck[hand_size * 2 :]),
    )


def _sort_key(card: Card) -> tuple[str, int]:
    return card.department_label, card.rank_value


def sort_hand(hand: Sequence[Card]) -> list[Card]:
    """Return ``hand`` ordered by department then rank; the sort is stable."""

    return sorted(hand, key=_sort_key)


def replenish_draw_pile(
    draw_pile: Sequence[Card],
    discard_pile: Sequence[Card],
    rng: RandomSource | None = None,
) -> tuple[list[Card], list[Card]]:
    """Rebuild an exhausted draw pile from everything below the discard top.

    Returns the new ``(draw_pile, discard_pile)`` pair. Nothing changes when
    the draw pile still has cards or the discard pile has one card or fewer.
    """

    if draw_pile or len(discard_pile) <= 1:
        return list(draw_pile), list(discard_pile)
    top_card = discard_pile[-1]
    pool = shuffle(discard_pile[:-1], rng)
    return pool, [top_card]
