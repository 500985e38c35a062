"""Run validation with intern wildcard substitution."""

from __future__ import annotations

from typing import Iterable, Sequence

from .cards import Card, DepartmentCard


def department_ranks(cards: Iterable[Card]) -> list[int]:
    """Return rank values of the department cards in ``cards``."""

    return [card.rank_value for card in cards if isinstance(card, DepartmentCard)]


def sequence_gap(ranks: Sequence[int]) -> int:
    """Return how many intermediate ranks are missing from ``ranks``.

    Duplicates are not collapsed; callers reject them separately.
    """

    ordered = sorted(ranks)
    gap = 0
    for prev, nxt in zip(ordered, ordered[1:]):
        gap += max(0, nxt - prev - 1)
    return gap


def is_valid_sequence(cards: Sequence[Card], available_wildcards: int) -> bool:
    """Return ``True`` if the department cards form a run bridgeable by wildcards.

    Validity depends only on which ranks are present, not on the order the
    cards are listed in. Intern cards in ``cards`` are ignored; the caller
    accounts for them through ``available_wildcards``.
    """

    ranks = department_ranks(cards)
    if len(ranks) <= 1:
        return True
    if len(set(ranks)) != len(ranks):
        return False
    return sequence_gap(ranks) <= max(0, available_wildcards)
