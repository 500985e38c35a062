"""Pydantic models describing persisted records and relay messages."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .state import Actor, GameStatus


class CardModel(BaseModel):
    id: str
    department: str
    value: str
    type: Literal["department", "intern"]
    isUniversal: Optional[bool] = None


class GameRecordModel(BaseModel):
    """Full game record as exchanged with clients."""

    id: Optional[int] = None
    playerHand: list[CardModel]
    aiHand: list[CardModel]
    drawPile: list[CardModel]
    discardPile: list[CardModel]
    currentTurn: Actor
    gameStatus: GameStatus


class GameRecordPatch(BaseModel):
    """Partial record; only the fields present are merged into the store.

    ``id`` is accepted so an echoed record can be sent back unchanged, but it
    is never merged; the message's ``gameId`` addresses the game.
    """

    model_config = ConfigDict(extra="forbid")

    id: Optional[int] = None
    playerHand: Optional[list[CardModel]] = None
    aiHand: Optional[list[CardModel]] = None
    drawPile: Optional[list[CardModel]] = None
    discardPile: Optional[list[CardModel]] = None
    currentTurn: Optional[Actor] = None
    gameStatus: Optional[GameStatus] = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude={"id"}, exclude_unset=True, exclude_none=True)


class RelayMessage(BaseModel):
    type: str
    game_id: Optional[int] = Field(default=None, alias="gameId")
    state: Optional[dict[str, Any]] = None
