"""Environment-driven client settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .engine import DEFAULT_TIMEOUT
from .sync import AI_THINK_DELAY

DEFAULT_ENGINE_URL = "http://localhost:8080"


@dataclass(frozen=True)
class ClientSettings:
    engine_url: str = DEFAULT_ENGINE_URL
    think_delay: float = AI_THINK_DELAY
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientSettings":
        """Read ``XOCLIENT_*`` variables, keeping defaults for unset ones."""

        env = os.environ if environ is None else environ
        think_delay = float(env.get("XOCLIENT_THINK_DELAY", str(AI_THINK_DELAY)))
        timeout = float(env.get("XOCLIENT_TIMEOUT", str(DEFAULT_TIMEOUT)))
        if think_delay < 0:
            raise ValueError("XOCLIENT_THINK_DELAY must not be negative")
        if timeout <= 0:
            raise ValueError("XOCLIENT_TIMEOUT must be positive")
        return cls(
            engine_url=env.get("XOCLIENT_ENGINE_URL", DEFAULT_ENGINE_URL),
            think_delay=think_delay,
            timeout=timeout,
            log_level=env.get("XOCLIENT_LOG_LEVEL", "WARNING").upper(),
        )
