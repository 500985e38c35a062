"""Heuristic AI opponent package."""

from . import difficulty, policy

__all__ = [
    "difficulty",
    "policy",
]
