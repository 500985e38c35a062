"""Legal action generation utilities for Corporate Combat turns."""

from __future__ import annotations

from dataclasses import dataclass

from . import rules
from .ai.policy import DrawSource
from .cards import Card, is_purge_card
from .deck import RandomSource
from .state import Actor, GameState, TurnPhase


@dataclass(frozen=True)
class DrawAction:
    """Action describing how an actor draws a card."""

    source: DrawSource


@dataclass(frozen=True)
class DiscardAction:
    """Action describing the card put on the discard pile."""

    card_id: str
    purge: bool = False


def legal_draw_actions(state: GameState, actor: Actor) -> list[DrawAction]:
    """Return draw actions available to ``actor``."""

    if state.is_over or state.current_turn is not actor:
        return []
    if state.phase is not TurnPhase.AWAITING_DRAW:
        return []

    actions: list[DrawAction] = []
    if state.draw_pile or len(state.discard_pile) > 1:
        actions.append(DrawAction(source=DrawSource.DECK))
    if state.discard_pile:
        actions.append(DrawAction(source=DrawSource.DISCARD))
    return actions


def legal_discard_actions(state: GameState, actor: Actor) -> list[DiscardAction]:
    """Return discard-phase actions available to ``actor``."""

    if state.is_over or state.current_turn is not actor:
        return []
    if state.phase is not TurnPhase.AWAITING_DISCARD:
        return []
    hand = state.hand(actor)
    if len(hand) <= state.config.hand_size:
        return []

    actions = [DiscardAction(card_id=card.id) for card in hand]
    if state.config.enable_purge:
        actions.extend(DiscardAction(card_id=card.id, purge=True) for card in hand if is_purge_card(card))
    return actions


def apply_draw_action(
    state: GameState,
    actor: Actor,
    action: DrawAction,
    rng: RandomSource | None = None,
) -> Card:
    """Apply the provided draw action and return the card taken."""

    if action.source is DrawSource.DISCARD:
        return rules.draw_from_discard(state, actor)
    if action.source is DrawSource.DECK:
        return rules.draw_from_deck(state, actor, rng)
    raise ValueError(f"Unknown draw source {action.source}")


def apply_discard_action(
    state: GameState,
    actor: Actor,
    action: DiscardAction,
    rng: RandomSource | None = None,
) -> list[Card]:
    """Apply the provided discard action; returns the purged cards, if any."""

    if action.purge:
        return rules.purge(state, actor, action.card_id, rng)
    rules.discard_card(state, actor, action.card_id)
    return []
