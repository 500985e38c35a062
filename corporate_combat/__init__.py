"""Top-level package for the Corporate Combat game engine."""

from . import actions, cards, deck, encoding, portfolio, rules, sequences, session, state

__all__ = [
    "actions",
    "cards",
    "deck",
    "encoding",
    "portfolio",
    "rules",
    "sequences",
    "session",
    "state",
]
