"""Async HTTP client for the remote tic-tac-toe engine."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from .models import AiMoveResult, Difficulty, RemoteGameState

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


class TransportFailure(Exception):
    """A remote call failed on the network or returned an unusable payload."""


class EngineClient:
    """Thin wrapper over the engine's ``/api/game`` endpoints.

    Every failure, whether a connection error, a non-2xx status or a payload
    that does not decode, surfaces as :class:`TransportFailure`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"), timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> "EngineClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str) -> httpx.Response:
        logger.debug("%s %s", method, path)
        try:
            response = await self._http.request(method, path)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportFailure(f"{method} {path} failed: {exc}") from exc
        return response

    async def set_difficulty(self, level: Difficulty) -> None:
        await self._request("GET", f"/api/game/difficulty/{level.value}")

    async def fetch_state(self) -> RemoteGameState:
        response = await self._request("GET", "/api/game/state")
        try:
            return RemoteGameState.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise TransportFailure(f"Malformed game state: {exc}") from exc

    async def request_ai_move(self) -> AiMoveResult:
        response = await self._request("POST", "/api/game/aimove")
        try:
            return AiMoveResult.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise TransportFailure(f"Malformed AI move result: {exc}") from exc

    async def submit_move(self, index: int) -> str:
        response = await self._request("POST", f"/api/game/move/{index}")
        return response.text

    async def reset(self) -> None:
        await self._request("POST", "/api/game/reset")
