"""Entry point for running the client via ``python -m xoclient``."""

from __future__ import annotations

import asyncio
import logging

from .config import ClientSettings
from .console import run_console


def main() -> None:
    """Start the terminal client against the configured engine."""

    settings = ClientSettings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(run_console(settings))
    except (KeyboardInterrupt, EOFError):
        pass


if __name__ == "__main__":
    main()
