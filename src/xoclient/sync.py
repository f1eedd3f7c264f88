"""Turn synchronization with the remote engine."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .engine import EngineClient, TransportFailure
from .models import RemoteGameState, parse_outcome
from .render import render_board
from .session import Screen, Session
from .surface import StatusStyle, Surface

logger = logging.getLogger(__name__)

AI_THINK_DELAY = 0.8
AI_SYMBOL = "O"

THINKING_STATUS = "AI is thinking..."
LOCAL_TURN_ALIAS = "Your turn (X)"
CONNECTION_ERROR = "Error connecting to the game server."
MOVE_FAILED = "Could not process move."
AI_MOVE_FAILED = "AI move failed."
RESET_FAILED = "Could not reset game."


class TurnSynchronizer:
    """Keeps the surface in step with the engine's authoritative state.

    Every mutating call (reset, move, automated move) is followed by exactly
    one :meth:`sync_state` before the call returns. Automated turns run as a
    background task tagged with a generation number; :meth:`invalidate`
    cancels the task and makes any late result stale.
    """

    def __init__(
        self,
        engine: EngineClient,
        session: Session,
        surface: Surface,
        think_delay: Optional[float] = None,
    ) -> None:
        self.engine = engine
        self.session = session
        self.surface = surface
        self.think_delay = AI_THINK_DELAY if think_delay is None else think_delay
        self._generation = 0
        self._ai_task: Optional[asyncio.Task] = None
        self._reset_lock = asyncio.Lock()
        self.connection_lost = False

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def automated_turn_pending(self) -> bool:
        return self._ai_task is not None and not self._ai_task.done()

    def invalidate(self) -> None:
        """Discard any in-flight automated turn and its results."""

        self._generation += 1
        task, self._ai_task = self._ai_task, None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()

    async def settle(self) -> None:
        """Wait until no automated turn is running."""

        while self.automated_turn_pending:
            await asyncio.gather(self._ai_task, return_exceptions=True)

    def is_automated_turn(self, state: RemoteGameState) -> bool:
        return (
            not state.game_over
            and state.current_player == AI_SYMBOL
            and self.session.automated_opponent
        )

    def turn_prompt(self, symbol: str) -> str:
        if symbol == "X" and self.session.automated_opponent:
            alias = LOCAL_TURN_ALIAS
        else:
            alias = self.session.display_name(symbol)
        return f"It's {alias}!"

    async def reset_remote_game(self) -> None:
        """Reset the engine board and resync.

        Afterwards ``connection_lost`` tells whether the resync failed and the
        surface fell back to mode select.
        """

        # Resets reach the engine in the order they were issued; none are dropped.
        async with self._reset_lock:
            self.connection_lost = False
            try:
                await self.engine.reset()
            except TransportFailure:
                logger.exception("Error resetting game")
                self.surface.set_status(RESET_FAILED, StatusStyle.ERROR)
                return
            await self.sync_state()

    async def sync_state(self) -> Optional[RemoteGameState]:
        """Fetch, render and route the next turn.

        Returns the fetched state, or None when the fetch failed or was
        overtaken by a navigation change.
        """

        generation = self._generation
        try:
            state = await self.engine.fetch_state()
        except TransportFailure:
            logger.exception("Error fetching state")
            self.connection_lost = True
            self.invalidate()
            self.surface.set_status(CONNECTION_ERROR, StatusStyle.ERROR)
            self.surface.show(Screen.MODE_SELECT)
            return None
        if generation != self._generation:
            logger.debug("Dropping stale state from generation %d", generation)
            return None

        automated = self.is_automated_turn(state)
        render_board(
            self.surface, state.board, state.game_over, self.submit_move, locked=automated
        )
        if automated:
            self._schedule_automated_turn()
        elif state.game_over:
            self.surface.set_status(self.surface.status_text, StatusStyle.BANNER)
        else:
            self.surface.set_status(self.turn_prompt(state.current_player), StatusStyle.TURN)
        return state

    def _schedule_automated_turn(self) -> None:
        self._ai_task = asyncio.create_task(self.run_automated_turn(self._generation))

    async def run_automated_turn(self, generation: Optional[int] = None) -> None:
        if generation is None:
            generation = self._generation
        self.surface.set_status(THINKING_STATUS, StatusStyle.INFO)
        await asyncio.sleep(self.think_delay)
        if generation != self._generation:
            return

        try:
            result = await self.engine.request_ai_move()
        except TransportFailure:
            logger.exception("AI move error")
            if generation == self._generation:
                self.surface.set_status(AI_MOVE_FAILED, StatusStyle.ERROR)
            return
        if generation != self._generation:
            logger.debug("Discarding automated move from generation %d", generation)
            return

        outcome = parse_outcome(result.status)
        self.surface.set_status(outcome.describe(self.session.names), StatusStyle.INFO)
        await self.sync_state()

    async def submit_move(self, index: int) -> None:
        """Ask the engine to play ``index`` for whoever is to move."""

        try:
            message = await self.engine.submit_move(index)
        except TransportFailure:
            logger.exception("Error making move")
            self.surface.set_status(MOVE_FAILED, StatusStyle.ERROR)
            return
        outcome = parse_outcome(message)
        self.surface.set_status(outcome.describe(self.session.names), StatusStyle.INFO)
        await self.sync_state()
