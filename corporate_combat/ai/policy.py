"""Heuristic AI opponent for Corporate Combat."""

from __future__ import annotations

import random
from collections import Counter
from enum import Enum
from typing import Final, Sequence

from ..cards import Card, InternCard, is_purge_card
from ..deck import RandomSource
from ..portfolio import check_win_condition
from .difficulty import Difficulty, DifficultyProfile, profile_for

TARGET_BONUS: Final[float] = 5.0
NEAR_FOUR_BONUS: Final[float] = 10.0
NEAR_THREE_BONUS: Final[float] = 5.0
PURGE_CARD_BONUS: Final[float] = 8.0
INTERN_BASE_SCORE: Final[float] = 12.0
EXPECTED_DRAW_SCORE: Final[float] = 3.5
DISRUPTION_THRESHOLD: Final[int] = 2


class DrawSource(str, Enum):
    """Where an actor takes its card from at the start of a turn."""

    DECK = "deck"
    DISCARD = "discard"


def department_counts(hand: Sequence[Card]) -> Counter[str]:
    """Return how many cards of each department label ``hand`` holds."""

    return Counter(card.department_label for card in hand)


def target_departments(hand: Sequence[Card]) -> frozenset[str]:
    """Return the department labels with the maximum card count; ties keep all."""

    counts = department_counts(hand)
    if not counts:
        return frozenset()
    best = max(counts.values())
    return frozenset(label for label, count in counts.items() if count == best)


def _base_score(card: Card) -> float:
    if isinstance(card, InternCard):
        return INTERN_BASE_SCORE
    return float(card.rank_value)


def evaluate_card(card: Card, hand: Sequence[Card]) -> float:
    """Return how much the AI wants ``card`` given ``hand``; higher means keep."""

    score = _base_score(card)
    if card.department_label in target_departments(hand):
        score += TARGET_BONUS

    dept_count = department_counts(hand)[card.department_label]
    if dept_count == 3:
        score += NEAR_FOUR_BONUS
    elif dept_count == 2:
        score += NEAR_THREE_BONUS

    if is_purge_card(card):
        score += PURGE_CARD_BONUS
    return score


class GameAI:
    """Heuristic opponent whose only state is its difficulty and random source."""

    def __init__(
        self,
        difficulty: Difficulty | str = Difficulty.MEDIUM,
        rng: RandomSource | None = None,
    ) -> None:
        self.difficulty = Difficulty(difficulty)
        self.rng: RandomSource = rng if rng is not None else random.Random()

    @property
    def profile(self) -> DifficultyProfile:
        return profile_for(self.difficulty)

    def evaluate_card(self, card: Card, hand: Sequence[Card]) -> float:
        return evaluate_card(card, hand)

    def _play_noise(self) -> float:
        return self.rng.random() * self.profile.play_noise_span

    def _draw_jitter(self) -> float:
        return (self.rng.random() - 0.5) * self.profile.draw_jitter

    def _disruptive_seven(
        self,
        hand: Sequence[Card],
        discard_pile: Sequence[Card],
        opponent_last_card: Card | None,
    ) -> Card | None:
        if opponent_last_card is None:
            return None
        department = opponent_last_card.department_label
        discarded = sum(1 for card in discard_pile if card.department_label == department)
        if discarded < DISRUPTION_THRESHOLD:
            return None
        for card in hand:
            if is_purge_card(card) and card.department_label == department:
                return card
        return None

    def choose_card_to_play(
        self,
        hand: Sequence[Card],
        discard_pile: Sequence[Card],
        opponent_last_card: Card | None = None,
    ) -> Card | None:
        """Return the card the AI most wants to put into play, or ``None`` for an empty hand."""

        if not hand:
            return None
        if self.profile.disrupts_opponent:
            disruptive = self._disruptive_seven(hand, discard_pile, opponent_last_card)
            if disruptive is not None:
                return disruptive

        scored = [(evaluate_card(card, hand) + self._play_noise(), idx) for idx, card in enumerate(hand)]
        _, best_index = max(scored, key=lambda item: (item[0], -item[1]))
        return hand[best_index]

    def choose_discard(self, hand: Sequence[Card]) -> Card | None:
        """Return the card to give up; a winning discard always takes priority."""

        if not hand:
            return None
        for card in hand:
            remaining = [other for other in hand if other is not card]
            if check_win_condition(remaining):
                return card

        scored = [(evaluate_card(card, hand) + self._play_noise(), idx) for idx, card in enumerate(hand)]
        _, worst_index = min(scored, key=lambda item: (item[0], item[1]))
        return hand[worst_index]

    def should_use_purge(
        self,
        card: Card,
        hand: Sequence[Card],
        opponent_last_card: Card | None = None,
    ) -> bool:
        """Decide whether to spend a ``7`` on a purge."""

        if not is_purge_card(card):
            return False
        if self.profile.coin_flip_purge:
            return self.rng.random() > 0.5
        if opponent_last_card is not None and opponent_last_card.department_label == card.department_label:
            return True
        return department_counts(hand)[card.department_label] <= 1

    def evaluate_draw_choice(self, top_discard: Card | None, hand: Sequence[Card]) -> DrawSource:
        """Compare the visible discard against the expected value of a blind draw."""

        if top_discard is None:
            return DrawSource.DECK
        discard_score = evaluate_card(top_discard, hand) + self._draw_jitter()
        if discard_score > EXPECTED_DRAW_SCORE:
            return DrawSource.DISCARD
        return DrawSource.DECK


def create_ai(difficulty: Difficulty | str = Difficulty.MEDIUM, rng: RandomSource | None = None) -> GameAI:
    """Return a ``GameAI`` configured for ``difficulty``."""

    return GameAI(difficulty, rng)


__all__ = [
    "DrawSource",
    "GameAI",
    "create_ai",
    "department_counts",
    "evaluate_card",
    "target_departments",
]
