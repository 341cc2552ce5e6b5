"""Console logging (Rich).

A single `RichHandler` on stderr, installed on the `crates_smoke_test`
logger. Modules get children of it through `get_logger`.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "crates_smoke_test"


def init_logging(level: str = "INFO", *, console: Console | None = None) -> logging.Logger:
    """Configure the application logger once; later calls only update the level."""

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
            rich_tracebacks=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger of the application logger, e.g. `get_logger("registry")`."""

    return logging.getLogger(f"{LOGGER_NAME}.{name}")
