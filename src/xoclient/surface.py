"""Rendering surfaces: the abstract medium and an in-memory implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from .session import Screen

ClickHandler = Callable[[], Awaitable[None]]


class StatusStyle(Enum):
    PROMPT = auto()
    TURN = auto()
    BANNER = auto()
    INFO = auto()
    ERROR = auto()


@dataclass(frozen=True)
class CellView:
    """One drawn board cell; ``on_click`` is set only for playable cells."""

    index: int
    symbol: str = ""
    css_class: str = ""
    on_click: Optional[ClickHandler] = None

    @property
    def clickable(self) -> bool:
        return self.on_click is not None


class Surface(ABC):
    """Opaque display medium the controller and synchronizer draw on."""

    @property
    @abstractmethod
    def visible_screen(self) -> Screen: ...

    @abstractmethod
    def show(self, screen: Screen) -> None:
        """Make ``screen`` visible and hide every other screen."""

    @property
    @abstractmethod
    def status_text(self) -> str: ...

    @abstractmethod
    def set_status(self, text: str, style: StatusStyle = StatusStyle.INFO) -> None: ...

    @abstractmethod
    def set_mode_label(self, text: str) -> None: ...

    @abstractmethod
    def draw_board(self, cells: Sequence[CellView]) -> None: ...

    @abstractmethod
    def set_name_fields(self, x_name: str, o_name: str) -> None: ...

    @abstractmethod
    def read_name_fields(self) -> Tuple[str, str]: ...


class MemorySurface(Surface):
    """Headless surface that records everything drawn on it."""

    def __init__(self) -> None:
        self.screens = {screen: False for screen in Screen}
        self.screens[Screen.MODE_SELECT] = True
        self.status = ""
        self.status_style = StatusStyle.PROMPT
        self.mode_label = ""
        self.cells: List[CellView] = []
        self.name_fields: Tuple[str, str] = ("", "")
        self.status_history: List[str] = []

    @property
    def visible_screen(self) -> Screen:
        return next(screen for screen, shown in self.screens.items() if shown)

    def visible_screens(self) -> List[Screen]:
        return [screen for screen, shown in self.screens.items() if shown]

    def show(self, screen: Screen) -> None:
        for other in self.screens:
            self.screens[other] = other is screen

    @property
    def status_text(self) -> str:
        return self.status

    def set_status(self, text: str, style: StatusStyle = StatusStyle.INFO) -> None:
        self.status = text
        self.status_style = style
        self.status_history.append(text)

    def set_mode_label(self, text: str) -> None:
        self.mode_label = text

    def draw_board(self, cells: Sequence[CellView]) -> None:
        self.cells = list(cells)

    def set_name_fields(self, x_name: str, o_name: str) -> None:
        self.name_fields = (x_name, o_name)

    def read_name_fields(self) -> Tuple[str, str]:
        return self.name_fields

    def symbols(self) -> List[str]:
        return [cell.symbol for cell in self.cells]

    def clickable_indices(self) -> List[int]:
        return [cell.index for cell in self.cells if cell.clickable]

    async def click(self, index: int) -> bool:
        """Deliver a click to cell ``index``; False when it is not playable."""

        handler = self.cells[index].on_click
        if handler is None:
            return False
        await handler()
        return True
