"""Difficulty levels and the randomness they apply to AI decisions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final


class Difficulty(str, Enum):
    """AI difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True, slots=True)
class DifficultyProfile:
    """Noise magnitudes applied by the AI at a given difficulty."""

    play_noise: float
    draw_jitter: float
    coin_flip_purge: bool = False
    disrupts_opponent: bool = False

    @property
    def play_noise_span(self) -> float:
        """Upper bound of the uniform noise added to card scores."""

        return self.play_noise * 10.0


PROFILES: Final[dict[Difficulty, DifficultyProfile]] = {
    Difficulty.EASY: DifficultyProfile(play_noise=0.5, draw_jitter=2.0, coin_flip_purge=True),
    Difficulty.MEDIUM: DifficultyProfile(play_noise=0.25, draw_jitter=1.0),
    Difficulty.HARD: DifficultyProfile(play_noise=0.1, draw_jitter=0.5, disrupts_opponent=True),
}


def profile_for(difficulty: Difficulty | str) -> DifficultyProfile:
    """Return the noise profile for ``difficulty``."""

    return PROFILES[Difficulty(difficulty)]
