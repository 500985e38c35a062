"""HTTP and WebSocket surface over the game store."""

from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI, HTTPException, Request, WebSocket, WebSocketDisconnect, status

from . import relay
from .models import GameRecordModel
from .store import GameStore

logger = logging.getLogger(__name__)

games_router = APIRouter()


def _store(request: Request) -> GameStore:
    return request.app.state.store


@games_router.post("/games", response_model=GameRecordModel, status_code=status.HTTP_201_CREATED)
async def create_game(record: GameRecordModel, request: Request):
    payload = record.model_dump(mode="json", exclude={"id"}, exclude_none=True)
    created = _store(request).create(payload)
    logger.info("created game %d over HTTP", created["id"])
    return created


@games_router.get("/games/{game_id}", response_model=GameRecordModel)
async def get_game(game_id: int, request: Request):
    record = _store(request).get(game_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=relay.GAME_NOT_FOUND)
    return record


@games_router.websocket("/ws")
async def relay_socket(websocket: WebSocket) -> None:
    store: GameStore = websocket.app.state.store
    await websocket.accept()
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", status.WS_1000_NORMAL_CLOSURE))
            # binary frames are relayed like text ones
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""
            await websocket.send_json(relay.handle_message(store, raw))
    except WebSocketDisconnect:
        logger.debug("relay client disconnected")


def create_app(store: GameStore | None = None) -> FastAPI:
    """Build the application; each app owns its own store unless one is given."""

    app = FastAPI(title="Corporate Combat")
    app.state.store = store if store is not None else GameStore()
    app.include_router(games_router)
    return app
