"""Game session orchestration: actor gating, notices and the delayed AI turn."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Callable

from . import encoding, rules
from .actions import (
    DiscardAction,
    DrawAction,
    apply_discard_action,
    apply_draw_action,
    legal_draw_actions,
)
from .ai.policy import DrawSource, GameAI
from .cards import Card, create_deck
from .deck import RandomSource, shuffle
from .portfolio import check_win_condition
from .state import Actor, GameConfig, GameState, GameStatus, deal_new_game
from .store import GameStore

logger = logging.getLogger(__name__)

GAME_OVER_NOTICE = "The game is over. Start a new game to play again."
NOT_YOUR_TURN_NOTICE = "Wait for your turn."


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Outcome of a human action; rejected actions carry a user-facing notice."""

    ok: bool
    notice: str = ""
    card: Card | None = None


@dataclass(frozen=True, slots=True)
class AITurnReport:
    """Summary of one completed AI turn."""

    draw_source: DrawSource
    drawn: Card
    discarded: Card
    purged: tuple[Card, ...]
    game_status: GameStatus


def play_policy_turn(
    game_state: GameState,
    actor: Actor,
    ai: GameAI,
    rng: RandomSource | None = None,
) -> AITurnReport:
    """Draw and discard for ``actor`` using the heuristic ``ai``.

    A discard that completes a Career Portfolio always wins over a purge.
    """

    opponent_last = game_state.last_discards.get(actor.opponent)
    hand = game_state.hand(actor)
    source = ai.evaluate_draw_choice(game_state.top_discard, hand)
    available = [action.source for action in legal_draw_actions(game_state, actor)]
    if available and source not in available:
        source = available[0]
    drawn = apply_draw_action(game_state, actor, DrawAction(source=source), rng)

    hand = list(game_state.hand(actor))
    discard = ai.choose_discard(hand)
    assert discard is not None
    action = DiscardAction(card_id=discard.id)
    winning = check_win_condition([card for card in hand if card is not discard])
    if not winning and game_state.config.enable_purge:
        candidate = ai.choose_card_to_play(hand, game_state.discard_pile, opponent_last)
        if candidate is not None and ai.should_use_purge(candidate, hand, opponent_last):
            discard = candidate
            action = DiscardAction(card_id=candidate.id, purge=True)

    purged = apply_discard_action(game_state, actor, action, rng)
    logger.debug("%s drew from %s and discarded %s", actor.value, source.value, discard.id)
    return AITurnReport(
        draw_source=source,
        drawn=drawn,
        discarded=discard,
        purged=tuple(purged),
        game_status=game_state.game_status,
    )


class GameSession:
    """Owns one live game and enforces that only the active actor mutates it.

    ``generation`` increases on every ``new_game``; a delayed AI turn only
    applies when it was scheduled under the current generation.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        rng: random.Random | None = None,
        ai: GameAI | None = None,
        store: GameStore | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.ai = ai if ai is not None else GameAI(self.config.ai_difficulty, self.rng)
        self.store = store
        self.generation = 0
        self._pending: asyncio.Task[AITurnReport | None] | None = None
        self.state: GameState = self.new_game()

    def new_game(self, seed: int | None = None) -> GameState:
        """Discard any in-flight AI turn and deal a fresh game."""

        self.cancel_pending_ai_turn()
        self.generation += 1
        if seed is not None:
            self.rng.seed(seed)
        deck = shuffle(create_deck(), self.rng)
        self.state = deal_new_game(self.config, deck)
        self._sync()
        logger.info("started game generation %d", self.generation)
        return self.state

    def resume(self, game_id: int) -> GameState:
        """Replace the live game with record ``game_id`` from the store.

        Picks up edits that relay clients merged into the stored record. Raises
        ``LookupError`` when there is no store or no such record, and
        ``ValueError`` when the record does not decode.
        """

        if self.store is None:
            raise LookupError("session has no store to resume from")
        record = self.store.get(game_id)
        if record is None:
            raise LookupError(f"game {game_id} not found")
        game_state = encoding.state_from_record(record, self.config)
        self.cancel_pending_ai_turn()
        self.generation += 1
        self.state = game_state
        logger.info("resumed game %d as generation %d", game_id, self.generation)
        return self.state

    @property
    def ai_turn_pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def _gate_player(self) -> ActionResult | None:
        if self.state.is_over:
            return ActionResult(ok=False, notice=GAME_OVER_NOTICE)
        if self.state.current_turn is not Actor.PLAYER:
            return ActionResult(ok=False, notice=NOT_YOUR_TURN_NOTICE)
        return None

    def player_draw(self, source: DrawSource | str) -> ActionResult:
        """Draw for the human player; rule violations come back as notices."""

        rejected = self._gate_player()
        if rejected is not None:
            return rejected
        try:
            action = DrawAction(source=DrawSource(source))
        except ValueError:
            return ActionResult(ok=False, notice=f"Unknown draw source {source!r}.")
        try:
            drawn = apply_draw_action(self.state, Actor.PLAYER, action, self.rng)
        except rules.IllegalDraw as exc:
            logger.debug("rejected player draw: %s", exc)
            return ActionResult(ok=False, notice=str(exc))
        self._sync()
        return ActionResult(ok=True, card=drawn)

    def player_discard(self, card_id: str, *, purge: bool = False) -> ActionResult:
        """Discard for the human player and run the win check."""

        rejected = self._gate_player()
        if rejected is not None:
            return rejected
        action = DiscardAction(card_id=card_id, purge=purge)
        card = next((c for c in self.state.player_hand if c.id == card_id), None)
        try:
            apply_discard_action(self.state, Actor.PLAYER, action, self.rng)
        except rules.IllegalDiscard as exc:
            logger.debug("rejected player discard: %s", exc)
            return ActionResult(ok=False, notice=str(exc))
        self._sync()
        if self.state.game_status is GameStatus.WON:
            return ActionResult(ok=True, notice="I SUBMIT MY RESIGNATION™!", card=card)
        return ActionResult(ok=True, card=card)

    def run_ai_turn(self, generation: int | None = None) -> AITurnReport | None:
        """Play one full AI turn; stale or out-of-turn invocations return ``None``."""

        if generation is not None and generation != self.generation:
            logger.debug("discarding stale AI turn from generation %d", generation)
            return None
        if self.state.is_over or self.state.current_turn is not Actor.AI:
            return None
        report = play_policy_turn(self.state, Actor.AI, self.ai, self.rng)
        self._sync()
        return report

    def schedule_ai_turn(
        self,
        delay: float | None = None,
        on_complete: Callable[[AITurnReport], Any] | None = None,
    ) -> asyncio.Task[AITurnReport | None]:
        """Run the AI turn after ``delay`` seconds on the running event loop.

        The returned task is cancelled by ``new_game``; if it fires anyway
        after a reset, the generation check drops it.
        """

        self.cancel_pending_ai_turn()
        wait = self.config.ai_turn_delay if delay is None else delay
        task = asyncio.get_running_loop().create_task(
            self._delayed_ai_turn(self.generation, wait, on_complete)
        )
        self._pending = task
        return task

    async def _delayed_ai_turn(
        self,
        generation: int,
        delay: float,
        on_complete: Callable[[AITurnReport], Any] | None,
    ) -> AITurnReport | None:
        await asyncio.sleep(delay)
        report = self.run_ai_turn(generation)
        if report is not None and on_complete is not None:
            on_complete(report)
        return report

    def cancel_pending_ai_turn(self) -> bool:
        """Cancel a scheduled AI turn; return ``True`` if one was pending."""

        pending = self._pending
        self._pending = None
        if pending is None or pending.done():
            return False
        pending.cancel()
        logger.debug("cancelled pending AI turn")
        return True

    def to_record(self) -> dict[str, Any]:
        return encoding.state_to_record(self.state)

    def _sync(self) -> None:
        if self.store is None:
            return
        record = self.to_record()
        if self.state.id is None or self.store.update(self.state.id, record) is None:
            created = self.store.create(record)
            self.state.id = created["id"]
