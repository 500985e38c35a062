"""Realtime relay: applies client state updates to the store and echoes them."""

from __future__ import annotations

import json
import logging
from typing import Any, Final, Mapping

from pydantic import ValidationError

from .models import GameRecordPatch, RelayMessage
from .store import GameStore

logger = logging.getLogger(__name__)

UPDATE_GAME_STATE: Final[str] = "UPDATE_GAME_STATE"
GAME_STATE_UPDATED: Final[str] = "GAME_STATE_UPDATED"
ERROR: Final[str] = "ERROR"

INVALID_FORMAT: Final[str] = "Invalid message format"
UNKNOWN_TYPE: Final[str] = "Unknown message type"
GAME_NOT_FOUND: Final[str] = "Game not found"


def error_message(message: str) -> dict[str, Any]:
    return {"type": ERROR, "message": message}


def _parse(raw: str | bytes | Mapping[str, Any]) -> RelayMessage:
    if isinstance(raw, Mapping):
        return RelayMessage.model_validate(raw)
    return RelayMessage.model_validate(json.loads(raw))


def handle_message(store: GameStore, raw: str | bytes | Mapping[str, Any]) -> dict[str, Any]:
    """Process one inbound relay message and return the reply to send back.

    Bad input never raises; it is answered with an ``ERROR`` message so the
    connection can stay open.
    """

    try:
        message = _parse(raw)
    except (ValueError, ValidationError) as exc:
        logger.warning("rejected relay message: %s", exc)
        return error_message(INVALID_FORMAT)

    if message.type != UPDATE_GAME_STATE:
        logger.warning("rejected relay message of type %r", message.type)
        return error_message(UNKNOWN_TYPE)
    if message.game_id is None or message.state is None:
        logger.warning("relay update without gameId or state")
        return error_message(INVALID_FORMAT)

    try:
        patch = GameRecordPatch.model_validate(message.state)
    except ValidationError as exc:
        logger.warning("rejected relay state for game %d: %s", message.game_id, exc)
        return error_message(INVALID_FORMAT)

    updated = store.update(message.game_id, patch.changes())
    if updated is None:
        logger.warning("relay update for unknown game %d", message.game_id)
        return error_message(GAME_NOT_FOUND)
    return {"type": GAME_STATE_UPDATED, "state": updated}
