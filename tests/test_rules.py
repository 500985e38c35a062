"""Tests covering the win evaluator and turn transitions."""

from __future__ import annotations

import random

import pytest

from corporate_combat import rules
from corporate_combat.cards import Card, Department, DepartmentCard, InternCard, Rank, create_deck
from corporate_combat.state import Actor, GameConfig, GameState, GameStatus, TurnPhase, deal_new_game

DEV, HRA, MKT = Department.DEV, Department.HRA, Department.MKT
UNIVERSAL_1 = InternCard(None, 1)
UNIVERSAL_2 = InternCard(None, 2)


def _cards(department: Department, *values: str) -> list[Card]:
    return [DepartmentCard(department, Rank(value)) for value in values]


def _canonical_game(**config: object) -> GameState:
    return deal_new_game(GameConfig(**config), create_deck())


def _state(
    player: list[Card],
    ai: list[Card],
    *,
    draw: list[Card] | None = None,
    discard: list[Card] | None = None,
    turn: Actor = Actor.PLAYER,
    phase: TurnPhase = TurnPhase.AWAITING_DRAW,
) -> GameState:
    return GameState(
        player_hand=list(player),
        ai_hand=list(ai),
        draw_pile=list(draw or []),
        discard_pile=list(discard or []),
        current_turn=turn,
        phase=phase,
    )


@pytest.mark.parametrize(
    ("hand", "expected"),
    [
        (_cards(DEV, "5", "6", "7", "8") + _cards(HRA, "1", "2", "3"), True),
        (_cards(HRA, "1", "2", "3") + _cards(DEV, "8", "5", "7", "6"), True),
        (_cards(DEV, "5", "6", "8") + [InternCard(DEV)] + _cards(HRA, "1", "2", "3"), True),
        (_cards(DEV, "5", "6", "7", "8") + _cards(HRA, "1", "3") + [UNIVERSAL_1], True),
        (_cards(DEV, "4", "6", "8") + _cards(HRA, "2", "3") + [UNIVERSAL_1, UNIVERSAL_2], False),
        (_cards(DEV, "5", "6", "7", "8") + _cards(HRA, "1", "2") + _cards(MKT, "3"), False),
        (_cards(DEV, "5", "6", "7", "9") + _cards(HRA, "1", "2", "3"), False),
        (_cards(DEV, "1", "2", "3", "4", "5", "6", "7"), False),
        (_cards(DEV, "5", "6", "7", "8") + _cards(HRA, "1", "2"), False),
    ],
)
def test_check_win_condition(hand: list[Card], expected: bool) -> None:
    assert rules.check_win_condition(hand) is expected


def test_universal_intern_assigned_to_single_group() -> None:
    hand = _cards(DEV, "5", "7", "8") + _cards(HRA, "1", "2", "3") + [UNIVERSAL_1]

    portfolio = rules.find_portfolio(hand)

    assert portfolio is not None
    assert portfolio.four_department is DEV
    assert portfolio.three_department is HRA
    assert portfolio.universal_to_four == 1
    assert portfolio.universal_to_three == 0
    assert portfolio.universal_used == 1


def test_draw_from_deck_takes_front_card_and_sorts() -> None:
    game_state = _canonical_game()
    expected = game_state.draw_pile[0]

    card = rules.draw_from_deck(game_state, Actor.PLAYER)

    assert card == expected
    assert card in game_state.player_hand
    assert len(game_state.player_hand) == 8
    assert game_state.phase is TurnPhase.AWAITING_DISCARD
    assert len(game_state.draw_pile) == 39


def test_draw_from_discard_takes_top_card() -> None:
    top = DepartmentCard(MKT, Rank.NINE)
    game_state = _state(
        _cards(DEV, "1", "2", "3", "4", "5", "6", "7"),
        _cards(HRA, "1", "2", "3", "4", "5", "6", "7"),
        discard=[*_cards(MKT, "1"), top],
    )

    assert rules.draw_from_discard(game_state, Actor.PLAYER) == top
    assert game_state.discard_pile == _cards(MKT, "1")
    assert game_state.player_hand[-1] == top


def test_second_draw_in_turn_is_rejected() -> None:
    game_state = _canonical_game()
    rules.draw_from_deck(game_state, Actor.PLAYER)

    with pytest.raises(rules.IllegalDraw):
        rules.draw_from_deck(game_state, Actor.PLAYER)


def test_out_of_turn_draw_is_rejected() -> None:
    game_state = _canonical_game()
    with pytest.raises(rules.IllegalDraw):
        rules.draw_from_deck(game_state, Actor.AI)


def test_discard_before_draw_reports_notice() -> None:
    game_state = _canonical_game()
    card_id = game_state.player_hand[0].id

    with pytest.raises(rules.IllegalDiscard, match="You must draw a card before discarding."):
        rules.discard_card(game_state, Actor.PLAYER, card_id)


def test_discard_with_full_hand_reports_notice() -> None:
    game_state = _canonical_game()
    game_state.phase = TurnPhase.AWAITING_DISCARD

    with pytest.raises(rules.IllegalDiscard, match="You must have more than 7 cards to discard."):
        rules.discard_card(game_state, Actor.PLAYER, game_state.player_hand[0].id)


def test_discard_of_unknown_card_is_rejected() -> None:
    game_state = _canonical_game()
    rules.draw_from_deck(game_state, Actor.PLAYER)
    with pytest.raises(rules.IllegalDiscard):
        rules.discard_card(game_state, Actor.PLAYER, "FIN-O")


def test_discard_passes_turn_without_win() -> None:
    game_state = _canonical_game()
    rules.draw_from_deck(game_state, Actor.PLAYER)
    card = game_state.player_hand[0]

    rules.discard_card(game_state, Actor.PLAYER, card.id)

    assert game_state.top_discard == card
    assert game_state.last_discards[Actor.PLAYER] == card
    assert game_state.current_turn is Actor.AI
    assert game_state.phase is TurnPhase.AWAITING_DRAW
    assert game_state.game_status is GameStatus.PLAYING
    assert rules.card_partition_ok(game_state)


def test_player_winning_discard_ends_game() -> None:
    hand = _cards(DEV, "5", "6", "7", "8") + _cards(HRA, "1", "2", "3") + _cards(MKT, "9")
    game_state = _state(hand, _cards(MKT, "1", "2", "3", "4", "5", "6", "7"), phase=TurnPhase.AWAITING_DISCARD)

    rules.discard_card(game_state, Actor.PLAYER, "MKT-9")

    assert game_state.game_status is GameStatus.WON
    assert game_state.phase is TurnPhase.COMPLETE
    with pytest.raises(rules.IllegalDraw):
        rules.draw_from_deck(game_state, Actor.AI)


def test_ai_winning_discard_means_player_lost() -> None:
    hand = _cards(DEV, "5", "6", "7", "8") + _cards(HRA, "1", "2", "3") + _cards(MKT, "9")
    game_state = _state(
        _cards(MKT, "1", "2", "3", "4", "5", "6", "7"),
        hand,
        turn=Actor.AI,
        phase=TurnPhase.AWAITING_DISCARD,
    )

    rules.discard_card(game_state, Actor.AI, "MKT-9")

    assert game_state.game_status is GameStatus.LOST


def test_empty_draw_pile_reshuffles_discard() -> None:
    game_state = _canonical_game()
    game_state.discard_pile, game_state.draw_pile = game_state.draw_pile, []
    top = game_state.discard_pile[-1]

    card = rules.draw_from_deck(game_state, Actor.PLAYER, random.Random(1))

    assert card != top
    assert game_state.discard_pile == [top]
    assert len(game_state.draw_pile) == 38
    assert rules.card_partition_ok(game_state)


def test_draw_fails_when_no_stock_can_be_rebuilt() -> None:
    game_state = _state(
        _cards(DEV, "1", "2", "3", "4", "5", "6", "7"),
        _cards(HRA, "1", "2", "3", "4", "5", "6", "7"),
        discard=_cards(MKT, "1"),
    )

    assert not rules.ensure_stock(game_state)
    with pytest.raises(rules.IllegalDraw):
        rules.draw_from_deck(game_state, Actor.PLAYER)


def test_purge_strips_department_from_opponent() -> None:
    game_state = _canonical_game(enable_purge=True)
    rules.draw_from_deck(game_state, Actor.PLAYER)
    ai_dev = [card for card in game_state.ai_hand if card.department is DEV]
    assert len(ai_dev) == 5

    victims = rules.purge(game_state, Actor.PLAYER, "DEV-7")

    assert victims == ai_dev
    assert len(game_state.ai_hand) == 7
    assert not any(card.department is DEV for card in game_state.ai_hand)
    assert game_state.discard_pile[:5] == ai_dev
    assert game_state.top_discard == DepartmentCard(DEV, Rank.SEVEN)
    assert game_state.current_turn is Actor.AI
    assert rules.card_partition_ok(game_state)


def test_purge_requires_rule_and_seven() -> None:
    disabled = _canonical_game()
    rules.draw_from_deck(disabled, Actor.PLAYER)
    with pytest.raises(rules.IllegalDiscard):
        rules.purge(disabled, Actor.PLAYER, "DEV-7")

    enabled = _canonical_game(enable_purge=True)
    rules.draw_from_deck(enabled, Actor.PLAYER)
    with pytest.raises(rules.IllegalDiscard):
        rules.purge(enabled, Actor.PLAYER, "DEV-6")
    assert len(enabled.player_hand) == 8


def test_card_partition_detects_duplicates() -> None:
    game_state = _canonical_game()
    game_state.discard_pile.append(game_state.player_hand[0])
    assert not rules.card_partition_ok(game_state)
