"""Tic-tac-toe client: screen navigation and turn sync against a remote engine."""

from .engine import EngineClient, TransportFailure
from .navigation import NavigationController
from .session import Screen, Session
from .surface import MemorySurface, Surface
from .sync import TurnSynchronizer

__all__ = [
    "EngineClient",
    "MemorySurface",
    "NavigationController",
    "Screen",
    "Session",
    "Surface",
    "TransportFailure",
    "TurnSynchronizer",
]
