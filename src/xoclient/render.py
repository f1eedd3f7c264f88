"""Board rendering adapter."""

from __future__ import annotations

from typing import Awaitable, Callable, List, Sequence

from .models import EMPTY
from .surface import CellView, Surface

MoveHandler = Callable[[int], Awaitable[None]]


def _click_handler(on_move: MoveHandler, index: int):
    async def handle() -> None:
        await on_move(index)

    return handle


def build_cells(
    board: Sequence[str], game_over: bool, on_move: MoveHandler, locked: bool = False
) -> List[CellView]:
    cells: List[CellView] = []
    accepting = not game_over and not locked
    for index, value in enumerate(board):
        if value != EMPTY:
            cells.append(CellView(index, symbol=value, css_class=f"{value.lower()}-color"))
        elif accepting:
            cells.append(CellView(index, on_click=_click_handler(on_move, index)))
        else:
            cells.append(CellView(index))
    return cells


def render_board(
    surface: Surface,
    board: Sequence[str],
    game_over: bool,
    on_move: MoveHandler,
    locked: bool = False,
) -> None:
    """Redraw all nine cells from scratch.

    Empty cells become clickable only while the game is running and the board
    is not locked for the automated opponent's turn.
    """

    surface.draw_board(build_cells(board, game_over, on_move, locked))
