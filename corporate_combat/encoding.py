"""Wire encoding for cards and persisted game records."""

from __future__ import annotations

from typing import Any, Final, Mapping, Sequence

from .cards import INTERN, UNIVERSAL, Card, Department, DepartmentCard, InternCard, Rank
from .state import Actor, GameConfig, GameState, GameStatus, TurnPhase

RECORD_FIELDS: Final[tuple[str, ...]] = (
    "playerHand",
    "aiHand",
    "drawPile",
    "discardPile",
    "currentTurn",
    "gameStatus",
)


def card_to_dict(card: Card) -> dict[str, Any]:
    """Return the JSON-ready mapping for ``card``."""

    payload: dict[str, Any] = {
        "id": card.id,
        "department": card.department_label,
        "value": card.value,
        "type": card.kind,
    }
    if isinstance(card, InternCard):
        payload["isUniversal"] = card.is_universal
    return payload


def _universal_index(card_id: str) -> int:
    prefix = f"{UNIVERSAL}-{INTERN}-"
    if not card_id.startswith(prefix):
        raise ValueError(f"invalid universal intern id '{card_id}'")
    try:
        return int(card_id[len(prefix) :])
    except ValueError as exc:
        raise ValueError(f"invalid universal intern id '{card_id}'") from exc


def card_from_dict(payload: Mapping[str, Any]) -> Card:
    """Rebuild a card from its wire mapping; raises ``ValueError`` on bad input."""

    try:
        kind = payload["type"]
        department = payload["department"]
        value = payload["value"]
    except KeyError as exc:
        raise ValueError(f"card is missing field {exc.args[0]!r}") from exc

    card: Card
    if kind == "department":
        card = DepartmentCard(department=Department(department), rank=Rank(value))
    elif kind == "intern":
        if value != INTERN:
            raise ValueError("intern cards must carry the INTERN value")
        if payload.get("isUniversal") or department == UNIVERSAL:
            card = InternCard(department=None, index=_universal_index(str(payload.get("id", ""))))
        else:
            card = InternCard(department=Department(department))
    else:
        raise ValueError(f"unknown card type {kind!r}")

    expected_id = payload.get("id")
    if expected_id is not None and expected_id != card.id:
        raise ValueError(f"card id {expected_id!r} does not match its fields")
    return card


def cards_to_list(cards: Sequence[Card]) -> list[dict[str, Any]]:
    return [card_to_dict(card) for card in cards]


def cards_from_list(payloads: Sequence[Mapping[str, Any]]) -> list[Card]:
    return [card_from_dict(payload) for payload in payloads]


def state_to_record(state: GameState) -> dict[str, Any]:
    """Return the persisted record shape for ``state``."""

    return {
        "id": state.id,
        "playerHand": cards_to_list(state.player_hand),
        "aiHand": cards_to_list(state.ai_hand),
        "drawPile": cards_to_list(state.draw_pile),
        "discardPile": cards_to_list(state.discard_pile),
        "currentTurn": state.current_turn.value,
        "gameStatus": state.game_status.value,
    }


def _infer_phase(status: GameStatus, hand: Sequence[Card], config: GameConfig) -> TurnPhase:
    if status is not GameStatus.PLAYING:
        return TurnPhase.COMPLETE
    if len(hand) > config.hand_size:
        return TurnPhase.AWAITING_DISCARD
    return TurnPhase.AWAITING_DRAW


def state_from_record(record: Mapping[str, Any], config: GameConfig | None = None) -> GameState:
    """Rebuild a ``GameState`` from a persisted record."""

    missing = [name for name in RECORD_FIELDS if name not in record]
    if missing:
        raise ValueError(f"record is missing fields: {', '.join(missing)}")

    config = config or GameConfig()
    current_turn = Actor(record["currentTurn"])
    status = GameStatus(record["gameStatus"])
    game_state = GameState(
        player_hand=cards_from_list(record["playerHand"]),
        ai_hand=cards_from_list(record["aiHand"]),
        draw_pile=cards_from_list(record["drawPile"]),
        discard_pile=cards_from_list(record["discardPile"]),
        current_turn=current_turn,
        game_status=status,
        config=config,
        id=record.get("id"),
    )
    game_state.phase = _infer_phase(status, game_state.hand(current_turn), config)
    return game_state
