"""Wire models for the remote engine and structured move outcomes."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Symbol = Literal["X", "O"]

EMPTY = " "
BOARD_SIZE = 9
SYMBOLS = ("X", "O")


class Difficulty(str, Enum):
    """Automated opponent strength, valued by its wire label."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class RemoteGameState(BaseModel):
    """Authoritative board snapshot returned by ``GET /api/game/state``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    board: List[str] = Field(min_length=BOARD_SIZE, max_length=BOARD_SIZE)
    current_player: Symbol = Field(alias="currentPlayer")
    game_over: bool = Field(alias="gameOver")

    @field_validator("board", mode="before")
    @classmethod
    def split_board_string(cls, value: object) -> object:
        # A char[] board arrives as a single 9-character JSON string.
        if isinstance(value, str):
            return list(value)
        return value

    @field_validator("board")
    @classmethod
    def ensure_known_cells(cls, value: List[str]) -> List[str]:
        for cell in value:
            if cell not in (EMPTY, *SYMBOLS):
                raise ValueError(f"Unknown board cell {cell!r}")
        return value


class AiMoveResult(BaseModel):
    """Response of ``POST /api/game/aimove``."""

    model_config = ConfigDict(populate_by_name=True)

    move_index: int = Field(default=-1, alias="moveIndex")
    status: str = ""


class OutcomeReason(Enum):
    WIN = "win"
    DRAW = "draw"
    MOVED = "moved"
    REJECTED = "rejected"
    NONE = "none"


WIN_TEMPLATE = "{name} ({symbol}) wins!"

_WIN_PATTERN = re.compile(r"\b([XO]) wins!")


@dataclass(frozen=True)
class Outcome:
    """Structured reading of an engine outcome message."""

    reason: OutcomeReason
    text: str
    winner: Optional[Symbol] = None

    def describe(self, names: Mapping[str, str]) -> str:
        """Return the status line to show, with the winner's display name."""

        if self.reason is OutcomeReason.WIN and self.winner is not None:
            return WIN_TEMPLATE.format(name=names[self.winner], symbol=self.winner)
        return self.text


def parse_outcome(text: str) -> Outcome:
    """Classify the engine's plain-text move result."""

    stripped = text.strip()
    if not stripped:
        return Outcome(OutcomeReason.NONE, "")
    match = _WIN_PATTERN.search(stripped)
    if match:
        return Outcome(OutcomeReason.WIN, stripped, winner=match.group(1))
    if stripped.startswith("Draw"):
        return Outcome(OutcomeReason.DRAW, stripped)
    if stripped.startswith("Invalid"):
        return Outcome(OutcomeReason.REJECTED, stripped)
    return Outcome(OutcomeReason.MOVED, stripped)
