"""Console logging with Rich.

Usage::

    from filekeep.logging_setup import setup_logging

    setup_logging("DEBUG")                 # once at startup
    logger = logging.getLogger(__name__)   # per module

``FILEKEEP_LOG_LEVEL`` overrides the level passed in.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

_CONFIGURED_ATTR = "_filekeep_logging_configured"


def setup_logging(level: str = "INFO") -> None:
    """Install a Rich console handler on the root logger.

    Safe to call more than once; later calls only adjust the level.
    """
    level_name = os.environ.get("FILEKEEP_LOG_LEVEL", level).upper()
    resolved = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(resolved)
    if getattr(root, _CONFIGURED_ATTR, False):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    setattr(root, _CONFIGURED_ATTR, True)
