"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)`; this only wires the root
handler once at startup.
"""

from __future__ import annotations

import logging

from . import config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or config.log_level()),
        format=LOG_FORMAT,
    )
    # asyncpg and httpx are chatty at DEBUG; keep them at WARNING unless asked.
    for noisy in ("asyncpg", "httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
