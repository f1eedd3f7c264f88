"""Shared fixtures: an in-process fake engine and wired-up client objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Set

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

from xoclient.engine import EngineClient
from xoclient.navigation import NavigationController
from xoclient.session import Session
from xoclient.surface import MemorySurface
from xoclient.sync import TurnSynchronizer

WINNING_LINES = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


@dataclass
class FakeEngine:
    """Minimal stand-in for the remote engine with a failure switch."""

    board: List[str] = field(default_factory=lambda: [" "] * 9)
    current_player: str = "X"
    game_over: bool = False
    difficulty: str = "Easy"
    failing: bool = False
    broken_calls: Set[str] = field(default_factory=set)
    ai_moves: List[int] = field(default_factory=list)
    calls: List[str] = field(default_factory=list)

    def reset(self) -> None:
        self.board = [" "] * 9
        self.current_player = "X"
        self.game_over = False

    def make_move(self, index: int) -> str:
        if self.game_over or not 0 <= index < 9 or self.board[index] != " ":
            return "Invalid move"
        self.board[index] = self.current_player
        for a, b, c in WINNING_LINES:
            if self.board[a] != " " and self.board[a] == self.board[b] == self.board[c]:
                self.game_over = True
                return f"{self.current_player} wins!"
        if " " not in self.board:
            self.game_over = True
            return "Draw!"
        self.current_player = "O" if self.current_player == "X" else "X"
        return f"Move successful. It is {self.current_player}'s turn."

    def ai_move(self) -> int:
        if self.game_over:
            return -1
        while self.ai_moves:
            index = self.ai_moves.pop(0)
            if self.board[index] == " ":
                return index
        return self.board.index(" ")

    def count(self, call: str) -> int:
        return self.calls.count(call)


def build_engine_app(engine: FakeEngine) -> FastAPI:
    app = FastAPI(title="Fake tic-tac-toe engine")

    def record(call: str) -> None:
        engine.calls.append(call)
        if engine.failing or call in engine.broken_calls:
            raise HTTPException(status_code=503, detail="Engine unavailable")

    @app.get("/api/game/state")
    def get_state() -> dict:
        record("state")
        return {
            "board": list(engine.board),
            "currentPlayer": engine.current_player,
            "gameOver": engine.game_over,
        }

    @app.post("/api/game/move/{index}", response_class=PlainTextResponse)
    def make_move(index: int) -> str:
        record("move")
        return engine.make_move(index)

    @app.post("/api/game/reset", response_class=PlainTextResponse)
    def reset_game() -> str:
        record("reset")
        engine.reset()
        return "Game reset. New game started."

    @app.get("/api/game/difficulty/{level}", response_class=PlainTextResponse)
    def set_difficulty(level: str) -> str:
        record("difficulty")
        engine.difficulty = level
        return f"Difficulty set to {level}"

    @app.post("/api/game/aimove")
    def ai_move() -> dict:
        record("aimove")
        index = engine.ai_move()
        status = engine.make_move(index) if index != -1 else ""
        return {"moveIndex": index, "status": status}

    return app


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest_asyncio.fixture
async def engine_client(fake_engine: FakeEngine):
    transport = httpx.ASGITransport(app=build_engine_app(fake_engine))
    client = EngineClient("http://engine.test", transport=transport)
    yield client
    await client.aclose()


@pytest.fixture
def surface() -> MemorySurface:
    return MemorySurface()


@pytest.fixture
def session() -> Session:
    return Session()


@pytest_asyncio.fixture
async def sync(engine_client: EngineClient, session: Session, surface: MemorySurface):
    synchronizer = TurnSynchronizer(engine_client, session, surface, think_delay=0.0)
    yield synchronizer
    synchronizer.invalidate()
    await synchronizer.settle()


@pytest_asyncio.fixture
async def nav(sync: TurnSynchronizer, surface: MemorySurface) -> NavigationController:
    return NavigationController(sync, surface)


@pytest_asyncio.fixture
async def offline_client():
    """Engine client whose every request fails before reaching a server."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = EngineClient("http://engine.test", transport=httpx.MockTransport(handler))
    yield client
    await client.aclose()
