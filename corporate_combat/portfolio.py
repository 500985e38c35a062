"""Career Portfolio win-condition evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Sequence

from .cards import Card, Department, DepartmentCard, InternCard
from .sequences import is_valid_sequence

PORTFOLIO_SIZE: Final[int] = 7
FOUR_GROUP: Final[int] = 4
THREE_GROUP: Final[int] = 3


@dataclass(frozen=True, slots=True)
class DepartmentGroup:
    """Cards of one department, split into ranked cards and own interns."""

    department: Department
    regular: tuple[DepartmentCard, ...]
    own_interns: int

    @property
    def size(self) -> int:
        return len(self.regular) + self.own_interns


@dataclass(frozen=True, slots=True)
class Portfolio:
    """A winning split of a hand into a 4-run and a 3-run."""

    four_department: Department
    three_department: Department
    universal_to_four: int
    universal_to_three: int

    @property
    def universal_used(self) -> int:
        return self.universal_to_four + self.universal_to_three


def group_by_department(hand: Sequence[Card]) -> tuple[dict[Department, DepartmentGroup], int]:
    """Bucket ``hand`` by department and count the shared universal interns."""

    regular: dict[Department, list[DepartmentCard]] = {}
    interns: dict[Department, int] = {}
    universal = 0
    for card in hand:
        if isinstance(card, InternCard):
            if card.department is None:
                universal += 1
            else:
                interns[card.department] = interns.get(card.department, 0) + 1
                regular.setdefault(card.department, [])
        else:
            regular.setdefault(card.department, []).append(card)

    groups = {
        department: DepartmentGroup(
            department=department,
            regular=tuple(regular[department]),
            own_interns=interns.get(department, 0),
        )
        for department in Department
        if department in regular
    }
    return groups, universal


def _group_forms_run(group: DepartmentGroup, universal: int, target: int) -> bool:
    if group.size + universal != target:
        return False
    return is_valid_sequence(group.regular, group.own_interns + universal)


def find_portfolio(hand: Sequence[Card]) -> Portfolio | None:
    """Return the winning split of ``hand`` or ``None``.

    Universal interns form one shared pool. The 4-group draws what it needs
    from the pool first and the 3-group receives the remainder, so no
    universal intern is ever counted toward both runs. Candidate 4-group
    departments are tried in ``Department`` declaration order.
    """

    if len(hand) != PORTFOLIO_SIZE:
        return None

    groups, universal = group_by_department(hand)
    if len(groups) != 2:
        return None

    for four, three in ((0, 1), (1, 0)):
        ordered = list(groups.values())
        four_group, three_group = ordered[four], ordered[three]
        to_four = FOUR_GROUP - four_group.size
        if to_four < 0 or to_four > universal:
            continue
        to_three = universal - to_four
        if not _group_forms_run(four_group, to_four, FOUR_GROUP):
            continue
        if not _group_forms_run(three_group, to_three, THREE_GROUP):
            continue
        return Portfolio(
            four_department=four_group.department,
            three_department=three_group.department,
            universal_to_four=to_four,
            universal_to_three=to_three,
        )
    return None


def check_win_condition(hand: Sequence[Card]) -> bool:
    """Return ``True`` when ``hand`` is a complete Career Portfolio."""

    return find_portfolio(hand) is not None
