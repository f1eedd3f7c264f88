"""Screens and the locally owned session record."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional, Tuple

from .models import Difficulty

DEFAULT_NAMES: Dict[str, str] = {"X": "Player 1", "O": "Player 2"}
TWO_PLAYER_MODE = "2 Players Mode"
AI_MODE = "VS AI Mode"
HUMAN_LABEL = "You"


class Screen(Enum):
    """Top-level screens; exactly one is visible at a time."""

    MODE_SELECT = auto()
    PLAYER_INPUT = auto()
    DIFFICULTY_SELECT = auto()
    ACTIVE_GAME = auto()


def ai_label(difficulty: Difficulty) -> str:
    return f"AI ({difficulty.value})"


def _is_generated(symbol: str, name: str) -> bool:
    if name.startswith("Player"):
        return True
    if symbol == "X":
        return name == HUMAN_LABEL
    return name.startswith("AI")


@dataclass
class Session:
    """Names, mode and opponent settings for the game being played."""

    mode: str = ""
    automated_opponent: bool = False
    difficulty: Optional[Difficulty] = None
    names: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_NAMES))

    def reset(self) -> None:
        self.mode = ""
        self.automated_opponent = False
        self.difficulty = None
        self.names = dict(DEFAULT_NAMES)

    def use_human_names(self, x_name: str, o_name: str) -> None:
        """Store trimmed names, falling back to the defaults for blanks."""

        self.names = {
            "X": x_name.strip() or DEFAULT_NAMES["X"],
            "O": o_name.strip() or DEFAULT_NAMES["O"],
        }

    def use_ai_names(self, difficulty: Difficulty) -> None:
        self.difficulty = difficulty
        self.names = {"X": HUMAN_LABEL, "O": ai_label(difficulty)}

    def name_prefill(self) -> Tuple[str, str]:
        """Name field contents, blank wherever the stored name is generated."""

        x_name, o_name = self.names["X"], self.names["O"]
        return (
            "" if _is_generated("X", x_name) else x_name,
            "" if _is_generated("O", o_name) else o_name,
        )

    def display_name(self, symbol: str) -> str:
        return f"{self.names[symbol]} ({symbol})"
