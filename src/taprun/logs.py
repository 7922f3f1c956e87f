"""Diagnostic logging setup.

Operator messages go through ``taprun.ui``; this configures the
``taprun`` logger tree used for debug and failure diagnostics.
"""

from __future__ import annotations

import logging
import os

from rich.logging import RichHandler

from taprun.ui import console

LOG_LEVEL_ENV = "TAPRUN_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def resolve_level(level: str | None = None) -> int:
    name = (level or os.getenv(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(level: str | None = None) -> None:
    """Attach a single rich handler to the ``taprun`` logger.

    Safe to call more than once; existing handlers are replaced.
    """
    root = logging.getLogger("taprun")
    root.setLevel(resolve_level(level))

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = RichHandler(console=console, show_path=False, markup=False, rich_tracebacks=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
