"""Card abstractions and deck assembly for Corporate Combat."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable, Union

UNIVERSAL: Final[str] = "UNIVERSAL"
INTERN: Final[str] = "INTERN"
INTERN_RANK_VALUE: Final[int] = -1
UNIVERSAL_INTERN_COUNT: Final[int] = 2


class Department(str, Enum):
    """Enumeration of the four corporate departments."""

    DEV = "DEV"
    HRA = "HRA"
    MKT = "MKT"
    FIN = "FIN"


class Rank(str, Enum):
    """Enumeration of ranks ordered according to the sequencing scale."""

    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    A = "A"
    E = "E"
    O = "O"

    @classmethod
    def ordered(cls) -> tuple["Rank", ...]:
        """Return ranks in sequencing order."""

        return tuple(cls)


RANK_TO_VALUE: Final[dict[Rank, int]] = {rank: idx for idx, rank in enumerate(Rank.ordered())}


def rank_value(rank: Rank | str | None) -> int:
    """Map a rank onto ``0..11``; interns map to the ``-1`` sentinel."""

    if rank is None or rank == INTERN:
        return INTERN_RANK_VALUE
    return RANK_TO_VALUE[Rank(rank)]


@dataclass(frozen=True, slots=True)
class DepartmentCard:
    """Value object describing a ranked department card."""

    department: Department
    rank: Rank

    def __post_init__(self) -> None:
        if not isinstance(self.department, Department):
            raise TypeError(f"department must be a Department, got {self.department!r}")
        if not isinstance(self.rank, Rank):
            raise TypeError(f"rank must be a Rank, got {self.rank!r}")

    @property
    def id(self) -> str:
        return f"{self.department.value}-{self.rank.value}"

    @property
    def kind(self) -> str:
        return "department"

    @property
    def is_intern(self) -> bool:
        return False

    @property
    def is_universal(self) -> bool:
        return False

    @property
    def value(self) -> str:
        return self.rank.value

    @property
    def department_label(self) -> str:
        return self.department.value

    @property
    def rank_value(self) -> int:
        return RANK_TO_VALUE[self.rank]


@dataclass(frozen=True, slots=True)
class InternCard:
    """Wildcard card; ``department`` of ``None`` marks a universal intern."""

    department: Department | None = None
    index: int = 1

    def __post_init__(self) -> None:
        if self.department is not None and not isinstance(self.department, Department):
            raise TypeError(f"department must be a Department or None, got {self.department!r}")
        if self.department is None and not 1 <= self.index <= UNIVERSAL_INTERN_COUNT:
            raise ValueError(f"universal intern index must be 1..{UNIVERSAL_INTERN_COUNT}, got {self.index}")

    @property
    def id(self) -> str:
        if self.department is None:
            return f"{UNIVERSAL}-{INTERN}-{self.index}"
        return f"{self.department.value}-{INTERN}"

    @property
    def kind(self) -> str:
        return "intern"

    @property
    def is_intern(self) -> bool:
        return True

    @property
    def is_universal(self) -> bool:
        return self.department is None

    @property
    def rank(self) -> None:
        return None

    @property
    def value(self) -> str:
        return INTERN

    @property
    def department_label(self) -> str:
        if self.department is None:
            return UNIVERSAL
        return self.department.value

    @property
    def rank_value(self) -> int:
        return INTERN_RANK_VALUE

    def can_substitute_for(self, department: Department) -> bool:
        """Return ``True`` if the intern may fill a gap in ``department``."""

        return self.department is None or self.department == department


Card = Union[DepartmentCard, InternCard]


def iter_full_deck() -> Iterable[Card]:
    """Yield all physical cards in a fresh deck in canonical order."""

    for department in Department:
        for rank in Rank.ordered():
            yield DepartmentCard(department=department, rank=rank)
    for department in Department:
        yield InternCard(department=department)
    for index in range(1, UNIVERSAL_INTERN_COUNT + 1):
        yield InternCard(department=None, index=index)


def create_deck() -> list[Card]:
    """Return the deterministic 54-card deck."""

    return list(iter_full_deck())


DECK_CARD_COUNT: Final[int] = len(create_deck())


def is_purge_card(card: Card) -> bool:
    """Return ``True`` for the ``7`` cards carrying the purge ability."""

    return isinstance(card, DepartmentCard) and card.rank is Rank.SEVEN


def card_label(card: Card) -> str:
    """Create a display label suitable for CLI representations."""

    if isinstance(card, InternCard):
        if card.is_universal:
            return f"★{card.index}"
        return f"{card.department_label}:★"
    return f"{card.department_label}:{card.value}"


def find_card(cards: Iterable[Card], card_id: str) -> Card | None:
    """Return the card with ``card_id`` from ``cards`` if present."""

    for card in cards:
        if card.id == card_id:
            return card
    return None


def format_cards(cards: Iterable[Card]) -> str:
    return " ".join(card_label(card) for card in cards)
