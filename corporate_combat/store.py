"""In-memory game-state store with last-write-wins semantics."""

from __future__ import annotations

import copy
import logging
from typing import Any, Mapping

logger = logging.getLogger(__name__)

GameRecord = dict[str, Any]


class GameStore:
    """Keeps persisted game records keyed by an incrementing integer id."""

    def __init__(self) -> None:
        self._records: dict[int, GameRecord] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._records)

    def create(self, record: Mapping[str, Any]) -> GameRecord:
        """Store ``record`` under a fresh id and return the stored copy."""

        game_id = self._next_id
        self._next_id += 1
        stored = copy.deepcopy(dict(record))
        stored["id"] = game_id
        self._records[game_id] = stored
        logger.debug("created game record %d", game_id)
        return copy.deepcopy(stored)

    def get(self, game_id: int) -> GameRecord | None:
        """Return the record for ``game_id`` or ``None`` when absent."""

        record = self._records.get(game_id)
        if record is None:
            return None
        return copy.deepcopy(record)

    def update(self, game_id: int, partial: Mapping[str, Any]) -> GameRecord | None:
        """Merge ``partial`` into the record for ``game_id``; ``None`` when absent."""

        existing = self._records.get(game_id)
        if existing is None:
            logger.debug("update for unknown game %d ignored", game_id)
            return None
        merged = {**existing, **copy.deepcopy(dict(partial)), "id": game_id}
        self._records[game_id] = merged
        return copy.deepcopy(merged)
