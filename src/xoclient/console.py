"""Rich terminal front end driving the navigation controller."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import ClientSettings
from .engine import EngineClient
from .models import Difficulty
from .navigation import NavigationController
from .session import Screen, Session
from .surface import CellView, MemorySurface, StatusStyle
from .sync import TurnSynchronizer

logger = logging.getLogger(__name__)

_STATUS_STYLES = {
    StatusStyle.PROMPT: "bold white",
    StatusStyle.TURN: "bold white",
    StatusStyle.BANNER: "bold yellow",
    StatusStyle.INFO: "cyan",
    StatusStyle.ERROR: "bold red",
}

_SYMBOL_STYLES = {"X": "bold magenta", "O": "bold green"}

_DIFFICULTY_KEYS = {"1": Difficulty.EASY, "2": Difficulty.MEDIUM, "3": Difficulty.HARD}

_HELP = {
    Screen.MODE_SELECT: "1  2 Players    2  VS AI    q  quit",
    Screen.PLAYER_INPUT: "n  enter names    s  start    b  back    q  quit",
    Screen.DIFFICULTY_SELECT: "1  Easy    2  Medium    3  Hard    b  back    q  quit",
    Screen.ACTIVE_GAME: "1-9  play cell    r  restart    b  back    m  modes    q  quit",
}


def _board_table(cells: Sequence[CellView]) -> Table:
    table = Table(show_header=False, show_edge=True, box=rich.box.HEAVY, padding=(0, 1))
    for _ in range(3):
        table.add_column(width=3, justify="center")
    for row in range(3):
        values = []
        for cell in cells[row * 3 : row * 3 + 3]:
            if cell.symbol:
                values.append(f"[{_SYMBOL_STYLES[cell.symbol]}]{cell.symbol}[/]")
            elif cell.clickable:
                values.append(f"[dim]{cell.index + 1}[/dim]")
            else:
                values.append("[dim]·[/dim]")
        table.add_row(*values)
    return table


class ConsoleSurface(MemorySurface):
    """Memory surface that can paint itself onto a rich console."""

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console

    def set_status(self, text: str, style: StatusStyle = StatusStyle.INFO) -> None:
        super().set_status(text, style)
        if style in (StatusStyle.INFO, StatusStyle.ERROR) and text:
            self.console.print(Text(text, style=_STATUS_STYLES[style]))

    def draw(self) -> None:
        screen = self.visible_screen
        parts = []
        if screen is Screen.ACTIVE_GAME:
            parts.append(Align.center(Text(self.mode_label, style="dim")))
            parts.append(Align.center(_board_table(self.cells)))
        elif screen is Screen.PLAYER_INPUT:
            x_name, o_name = self.name_fields
            parts.append(Text(f"Player X: {x_name or '(Player 1)'}"))
            parts.append(Text(f"Player O: {o_name or '(Player 2)'}"))
        elif screen is Screen.DIFFICULTY_SELECT:
            parts.append(Text("Choose the AI difficulty:"))
        parts.append(Align.center(Text(self.status, style=_STATUS_STYLES[self.status_style])))
        parts.append(Text(_HELP[screen], style="dim"))
        self.console.print(
            Panel(Group(*parts), title="[bold]T I C - T A C - T O E[/bold]", border_style="bright_blue")
        )


async def _ask(console: Console, prompt: str) -> str:
    return (await asyncio.to_thread(console.input, prompt)).strip()


async def handle_command(
    nav: NavigationController, surface: ConsoleSurface, command: str
) -> None:
    """Dispatch one typed command for the visible screen."""

    screen = nav.screen
    if screen is Screen.MODE_SELECT:
        if command == "1":
            nav.select_two_player_mode()
        elif command == "2":
            nav.select_automated_opponent_mode()
        else:
            surface.console.print("[yellow]Pick 1 or 2.[/yellow]")
    elif screen is Screen.PLAYER_INPUT:
        if command == "n":
            x_name = await _ask(surface.console, "Player X name: ")
            o_name = await _ask(surface.console, "Player O name: ")
            surface.set_name_fields(x_name, o_name)
        elif command == "s":
            await nav.start_human_game()
        elif command == "b":
            await nav.go_to_mode_select()
    elif screen is Screen.DIFFICULTY_SELECT:
        if command in _DIFFICULTY_KEYS:
            await nav.choose_difficulty(_DIFFICULTY_KEYS[command])
        elif command == "b":
            await nav.go_to_mode_select()
    elif command.isdigit() and 1 <= int(command) <= len(surface.cells):
        if not await surface.click(int(command) - 1):
            surface.console.print("[yellow]That cell cannot be played.[/yellow]")
    elif command == "r":
        await nav.restart_current_game()
    elif command == "b":
        await nav.go_back()
    elif command == "m":
        await nav.go_to_mode_select()


async def run_console(settings: ClientSettings, console: Optional[Console] = None) -> None:
    console = console or Console()
    surface = ConsoleSurface(console)
    async with EngineClient(settings.engine_url, timeout=settings.timeout) as engine:
        sync = TurnSynchronizer(engine, Session(), surface, think_delay=settings.think_delay)
        nav = NavigationController(sync, surface)
        logger.info("Using engine at %s", settings.engine_url)
        while True:
            await sync.settle()
            surface.draw()
            command = (await _ask(console, "> ")).lower()
            if command in ("q", "quit"):
                break
            await handle_command(nav, surface, command)
        sync.invalidate()
