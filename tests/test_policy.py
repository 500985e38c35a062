from __future__ import annotations

import random
from typing import Sequence

import pytest

from corporate_combat.ai import difficulty, policy
from corporate_combat.ai.difficulty import Difficulty
from corporate_combat.ai.policy import DrawSource, GameAI
from corporate_combat.cards import Card, Department, DepartmentCard, InternCard, Rank

DEV, HRA, MKT, FIN = Department.DEV, Department.HRA, Department.MKT, Department.FIN


class ScriptedSource:
    """Random source returning a fixed value so noise is predictable."""

    def __init__(self, value: float) -> None:
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value

    def randrange(self, stop: int) -> int:
        return 0


def _cards(department: Department, *values: str) -> list[Card]:
    return [DepartmentCard(department, Rank(value)) for value in values]


def test_evaluate_card_bonuses() -> None:
    hand = _cards(DEV, "1", "2", "3") + _cards(HRA, "4", "5") + _cards(MKT, "6")

    # rank 0 + target 5 + near-four 10
    assert policy.evaluate_card(hand[0], hand) == pytest.approx(15.0)
    # rank 4 + near-three 5
    assert policy.evaluate_card(hand[4], hand) == pytest.approx(9.0)
    # rank 5, lone card
    assert policy.evaluate_card(hand[5], hand) == pytest.approx(5.0)


def test_evaluate_card_rewards_sevens_and_interns() -> None:
    seven = DepartmentCard(FIN, Rank.SEVEN)
    intern = InternCard(None, 1)
    hand = [seven, intern, *_cards(DEV, "1", "2")]

    assert policy.evaluate_card(seven, hand) == pytest.approx(6 + policy.PURGE_CARD_BONUS)
    assert policy.evaluate_card(intern, hand) >= policy.INTERN_BASE_SCORE


def test_target_departments_keeps_ties() -> None:
    hand = _cards(DEV, "1", "2") + _cards(HRA, "3", "4") + _cards(MKT, "5")
    assert policy.target_departments(hand) == frozenset({"DEV", "HRA"})
    assert policy.target_departments([]) == frozenset()


def _decisions(ai: GameAI, hands: Sequence[list[Card]]) -> list[str]:
    picks = []
    for hand in hands:
        card = ai.choose_card_to_play(hand, [])
        assert card is not None
        picks.append(card.id)
    return picks


def test_ai_is_deterministic_with_seeded_source() -> None:
    hands = [
        _cards(DEV, "1", "5", "9") + _cards(HRA, "2", "3") + _cards(MKT, "O", "E"),
        _cards(FIN, "1", "2", "3", "4") + _cards(MKT, "5", "6", "7", "8"),
    ]
    first = GameAI(Difficulty.EASY, random.Random(11))
    second = GameAI(Difficulty.EASY, random.Random(11))

    assert _decisions(first, hands) == _decisions(second, hands)
    assert first.evaluate_draw_choice(hands[0][0], hands[1]) == second.evaluate_draw_choice(hands[0][0], hands[1])


def test_noise_span_orders_by_difficulty() -> None:
    spans = [difficulty.profile_for(level).play_noise_span for level in (Difficulty.HARD, Difficulty.MEDIUM, Difficulty.EASY)]
    jitters = [difficulty.profile_for(level).draw_jitter for level in (Difficulty.HARD, Difficulty.MEDIUM, Difficulty.EASY)]

    assert spans == sorted(spans)
    assert jitters == sorted(jitters)
    assert spans == pytest.approx([1.0, 2.5, 5.0])


def test_choose_card_to_play_breaks_ties_by_position() -> None:
    hand = _cards(DEV, "3") + _cards(HRA, "3")
    ai = GameAI(Difficulty.MEDIUM, ScriptedSource(0.0))
    assert ai.choose_card_to_play(hand, []) == hand[0]
    assert ai.choose_card_to_play([], []) is None


def test_hard_ai_plays_disruptive_seven() -> None:
    hand = _cards(DEV, "1", "2", "3") + _cards(HRA, "7")
    discard_pile = _cards(HRA, "1", "2")
    ai = GameAI(Difficulty.HARD, ScriptedSource(0.5))

    chosen = ai.choose_card_to_play(hand, discard_pile, opponent_last_card=discard_pile[-1])

    assert chosen == DepartmentCard(HRA, Rank.SEVEN)


def test_medium_ai_does_not_disrupt() -> None:
    hand = _cards(DEV, "1", "2", "3") + _cards(HRA, "7")
    discard_pile = _cards(HRA, "1", "2")
    ai = GameAI(Difficulty.MEDIUM, ScriptedSource(0.0))

    chosen = ai.choose_card_to_play(hand, discard_pile, opponent_last_card=discard_pile[-1])

    assert chosen == DepartmentCard(DEV, Rank.THREE)


def test_choose_discard_prefers_winning_discard() -> None:
    hand = _cards(DEV, "5", "6", "7", "8") + _cards(HRA, "1", "2", "3") + _cards(MKT, "O")
    ai = GameAI(Difficulty.EASY, ScriptedSource(0.99))

    assert ai.choose_discard(hand) == DepartmentCard(MKT, Rank.O)


def test_choose_discard_drops_lowest_value() -> None:
    hand = _cards(DEV, "5", "6", "8") + _cards(HRA, "1", "2", "3") + _cards(MKT, "1", "O")
    ai = GameAI(Difficulty.MEDIUM, ScriptedSource(0.0))

    assert ai.choose_discard(hand) == DepartmentCard(MKT, Rank.ONE)
    assert ai.choose_discard([]) is None


def test_should_use_purge() -> None:
    seven = DepartmentCard(DEV, Rank.SEVEN)
    lone = [seven, *_cards(HRA, "1", "2")]
    backed = [seven, *_cards(DEV, "1", "2")]
    medium = GameAI(Difficulty.MEDIUM, ScriptedSource(0.0))

    assert medium.should_use_purge(seven, lone)
    assert not medium.should_use_purge(seven, backed)
    assert medium.should_use_purge(seven, backed, opponent_last_card=DepartmentCard(DEV, Rank.NINE))
    assert not medium.should_use_purge(DepartmentCard(DEV, Rank.SIX), lone)

    assert GameAI(Difficulty.EASY, ScriptedSource(0.9)).should_use_purge(seven, backed)
    assert not GameAI(Difficulty.EASY, ScriptedSource(0.1)).should_use_purge(seven, lone)


@pytest.mark.parametrize(
    ("top", "expected"),
    [
        (None, DrawSource.DECK),
        (DepartmentCard(DEV, Rank.O), DrawSource.DISCARD),
        (DepartmentCard(FIN, Rank.TWO), DrawSource.DECK),
    ],
)
def test_evaluate_draw_choice(top: Card | None, expected: DrawSource) -> None:
    hand = _cards(DEV, "1", "2") + _cards(HRA, "5")
    ai = GameAI(Difficulty.HARD, ScriptedSource(0.5))
    assert ai.evaluate_draw_choice(top, hand) is expected


def test_create_ai_accepts_strings() -> None:
    ai = policy.create_ai("hard")
    assert ai.difficulty is Difficulty.HARD
    assert ai.profile.disrupts_opponent
