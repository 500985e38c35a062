"""Turn transitions and rule enforcement for Corporate Combat."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Final

from .cards import DECK_CARD_COUNT, Card, DepartmentCard, find_card, is_purge_card
from .deck import RandomSource, replenish_draw_pile, sort_hand
from .portfolio import PORTFOLIO_SIZE, check_win_condition, find_portfolio
from .state import Actor, GameState, GameStatus, TurnPhase

logger = logging.getLogger(__name__)

__all__ = [
    "IllegalDraw",
    "IllegalDiscard",
    "DRAW_FIRST_NOTICE",
    "HAND_TOO_SMALL_NOTICE",
    "check_win_condition",
    "find_portfolio",
    "ensure_stock",
    "draw_from_deck",
    "draw_from_discard",
    "discard_card",
    "purge",
    "card_partition_ok",
]

DRAW_FIRST_NOTICE: Final[str] = "You must draw a card before discarding."
HAND_TOO_SMALL_NOTICE: Final[str] = "You must have more than {hand_size} cards to discard."


class IllegalDraw(RuntimeError):
    """Raised when an actor attempts to draw illegally."""


class IllegalDiscard(RuntimeError):
    """Raised when an actor attempts to discard illegally."""


def _require_turn(state: GameState, actor: Actor, error: type[RuntimeError]) -> None:
    if state.is_over:
        raise error("game already finished")
    if state.current_turn is not actor:
        raise error("not this actor's turn")


def ensure_stock(state: GameState, rng: RandomSource | None = None) -> bool:
    """Reshuffle the discard pile into an empty draw pile; return ``True`` if it did."""

    if state.draw_pile or len(state.discard_pile) <= 1:
        return False
    state.draw_pile, state.discard_pile = replenish_draw_pile(
        state.draw_pile, state.discard_pile, rng
    )
    logger.debug("reshuffled %d cards into the draw pile", len(state.draw_pile))
    return True


def _take_into_hand(state: GameState, actor: Actor, card: Card) -> None:
    state.set_hand(actor, sort_hand([*state.hand(actor), card]))
    state.phase = TurnPhase.AWAITING_DISCARD


def draw_from_deck(state: GameState, actor: Actor, rng: RandomSource | None = None) -> Card:
    """Draw the top card of the draw pile for ``actor``."""

    _require_turn(state, actor, IllegalDraw)
    if state.phase is not TurnPhase.AWAITING_DRAW:
        raise IllegalDraw("actor has already drawn this turn")
    ensure_stock(state, rng)
    if not state.draw_pile:
        raise IllegalDraw("draw pile is empty")

    card = state.draw_pile.pop(0)
    _take_into_hand(state, actor, card)
    logger.debug("%s drew from deck", actor.value)
    return card


def draw_from_discard(state: GameState, actor: Actor) -> Card:
    """Take the top discard for ``actor``."""

    _require_turn(state, actor, IllegalDraw)
    if state.phase is not TurnPhase.AWAITING_DRAW:
        raise IllegalDraw("actor has already drawn this turn")
    if not state.discard_pile:
        raise IllegalDraw("discard pile is empty")

    card = state.discard_pile.pop()
    _take_into_hand(state, actor, card)
    logger.debug("%s picked up %s", actor.value, card.id)
    return card


def _check_discard(state: GameState, actor: Actor, card_id: str) -> Card:
    _require_turn(state, actor, IllegalDiscard)
    if state.phase is not TurnPhase.AWAITING_DISCARD:
        raise IllegalDiscard(DRAW_FIRST_NOTICE)
    hand = state.hand(actor)
    if len(hand) <= state.config.hand_size:
        raise IllegalDiscard(HAND_TOO_SMALL_NOTICE.format(hand_size=state.config.hand_size))
    card = find_card(hand, card_id)
    if card is None:
        raise IllegalDiscard("card not present in hand")
    return card


def _finish_turn(state: GameState, actor: Actor) -> None:
    hand = state.hand(actor)
    if len(hand) == PORTFOLIO_SIZE and check_win_condition(hand):
        state.game_status = GameStatus.WON if actor is Actor.PLAYER else GameStatus.LOST
        state.phase = TurnPhase.COMPLETE
        logger.info("%s completed a Career Portfolio", actor.value)
        return
    state.current_turn = actor.opponent
    state.phase = TurnPhase.AWAITING_DRAW


def discard_card(state: GameState, actor: Actor, card_id: str) -> Card:
    """Move ``card_id`` from ``actor``'s hand to the discard pile and run the win check."""

    card = _check_discard(state, actor, card_id)
    state.set_hand(actor, [c for c in state.hand(actor) if c.id != card.id])
    state.discard_pile.append(card)
    state.last_discards[actor] = card
    logger.debug("%s discarded %s", actor.value, card.id)
    _finish_turn(state, actor)
    return card


def purge(
    state: GameState,
    actor: Actor,
    card_id: str,
    rng: RandomSource | None = None,
) -> list[Card]:
    """Discard a ``7`` and strip its department from the opponent's hand.

    Purged cards go beneath the discard pile and the opponent draws the same
    number of replacements. Returns the purged cards.
    """

    if not state.config.enable_purge:
        raise IllegalDiscard("purge is disabled for this game")
    card = _check_discard(state, actor, card_id)
    if not is_purge_card(card):
        raise IllegalDiscard("only a 7 can purge")
    assert isinstance(card, DepartmentCard)

    opponent = actor.opponent
    victims = [c for c in state.hand(opponent) if c.department_label == card.department_label]

    state.set_hand(actor, [c for c in state.hand(actor) if c.id != card.id])
    state.discard_pile.append(card)
    state.last_discards[actor] = card

    remaining = [c for c in state.hand(opponent) if c not in victims]
    state.discard_pile[:0] = victims
    replacements: list[Card] = []
    for _ in victims:
        ensure_stock(state, rng)
        if not state.draw_pile:
            break
        replacements.append(state.draw_pile.pop(0))
    state.set_hand(opponent, sort_hand([*remaining, *replacements]))
    logger.debug(
        "%s purged %d %s card(s) with %s", actor.value, len(victims), card.department_label, card.id
    )

    _finish_turn(state, actor)
    return victims


def card_partition_ok(state: GameState, expected_total: int = DECK_CARD_COUNT) -> bool:
    """Return ``True`` if no card is duplicated or dropped across the containers."""

    counts = Counter(card.id for card in state.all_cards())
    return len(counts) == expected_total and all(count == 1 for count in counts.values())
