"""Screen navigation and session ownership."""

from __future__ import annotations

import logging
from typing import Optional

from .engine import TransportFailure
from .models import Difficulty
from .session import AI_MODE, TWO_PLAYER_MODE, Screen, Session
from .surface import StatusStyle, Surface
from .sync import TurnSynchronizer

logger = logging.getLogger(__name__)

MODE_PROMPT = "Choose Game Mode:"
DIFFICULTY_FAILED = "Could not set difficulty."


class NavigationController:
    """Moves between the four screens and is the only writer of the session."""

    def __init__(
        self,
        sync: TurnSynchronizer,
        surface: Surface,
        session: Optional[Session] = None,
    ) -> None:
        self.sync = sync
        self.surface = surface
        self.session = session if session is not None else sync.session
        self.surface.show(Screen.MODE_SELECT)
        self.surface.set_status(MODE_PROMPT, StatusStyle.PROMPT)

    @property
    def screen(self) -> Screen:
        return self.surface.visible_screen

    def _enter(self, screen: Screen) -> None:
        logger.debug("Showing %s", screen.name)
        if screen is not Screen.ACTIVE_GAME:
            self.sync.invalidate()
        self.surface.show(screen)

    def _show_player_input(self, mode: str) -> None:
        self.session.automated_opponent = False
        self.session.mode = mode
        self._enter(Screen.PLAYER_INPUT)
        self.surface.set_name_fields(*self.session.name_prefill())

    def select_two_player_mode(self) -> None:
        self._show_player_input(TWO_PLAYER_MODE)

    def select_automated_opponent_mode(self) -> None:
        self.session.automated_opponent = True
        self._enter(Screen.DIFFICULTY_SELECT)

    async def choose_difficulty(self, level: Difficulty) -> None:
        self.session.automated_opponent = True
        try:
            await self.sync.engine.set_difficulty(level)
        except TransportFailure:
            logger.exception("Error setting difficulty")
            self.surface.set_status(DIFFICULTY_FAILED, StatusStyle.ERROR)
            return

        self.session.mode = AI_MODE
        self.session.use_ai_names(level)
        self._enter(Screen.ACTIVE_GAME)
        self.surface.set_mode_label(f"{AI_MODE} - {level.value}")
        await self._new_game()

    async def start_human_game(self) -> None:
        self.session.use_human_names(*self.surface.read_name_fields())
        self._enter(Screen.ACTIVE_GAME)
        self.surface.set_mode_label(self.session.mode)
        await self._new_game()

    async def go_back(self) -> None:
        """Leave the board for the screen that configured it."""

        self.sync.invalidate()
        await self.sync.reset_remote_game()
        if self.sync.connection_lost:
            return
        if self.session.automated_opponent:
            self.select_automated_opponent_mode()
        else:
            self._show_player_input(self.session.mode)

    async def go_to_mode_select(self) -> None:
        self.sync.invalidate()
        await self.sync.reset_remote_game()
        self._enter(Screen.MODE_SELECT)
        if not self.sync.connection_lost:
            self.surface.set_status(MODE_PROMPT, StatusStyle.PROMPT)
        self.session.reset()

    async def restart_current_game(self) -> None:
        self.sync.invalidate()
        if self.session.automated_opponent:
            await self.choose_difficulty(self.session.difficulty or Difficulty.EASY)
        else:
            await self.start_human_game()

    async def _new_game(self) -> None:
        # A fresh board makes any automated turn from the previous one stale.
        self.sync.invalidate()
        await self.sync.reset_remote_game()
