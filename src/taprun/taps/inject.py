"""Attach a tap's on-disk environment to a resolved task."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from taprun.errors import InjectionError
from taprun.tasks.types import InjectedService, ResolvedTask

logger = logging.getLogger(__name__)

CONTAINER_DIRNAME = "container"


def inject_service(resolved: ResolvedTask, app_name: str, inject_path: str | Path) -> ResolvedTask:
    """Return ``resolved`` with the tap at ``inject_path`` attached.

    Raises:
        InjectionError: If ``inject_path`` is not an existing directory.
    """
    root = Path(inject_path).expanduser()
    if not root.is_dir():
        raise InjectionError(f"Cannot inject tap '{app_name}': {root} is not a directory", root)

    container = root / CONTAINER_DIRNAME
    service = InjectedService(
        app=app_name,
        root=root.resolve(),
        container=container.resolve() if container.is_dir() else None,
    )
    logger.debug("Injected tap '%s' from %s", app_name, service.root)

    params = dict(resolved.params or {})
    params.setdefault("location", str(service.root))
    return replace(resolved, params=params, injected=service)
