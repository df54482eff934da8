"""Logging configuration for medusa-sync.

Modules log through `logging.getLogger(__name__)`; nothing is configured at
import time. Entry points (CLI, host) call `configure_logging` once.

Usage:
    from core.logging_config import configure_logging

    configure_logging("INFO")
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "medusa-sync"


def configure_logging(level: str | int = "WARNING", *, console: Console | None = None) -> None:
    """Install a single Rich handler on the root logger.

    Calling it again only updates the level; handlers are never duplicated.
    """

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"unknown log level: {level!r}")
        level = resolved

    root = logging.getLogger()
    root.setLevel(level)
    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)

    # httpx/httpcore ya se cubren con la capa de debug del transporte.
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))
