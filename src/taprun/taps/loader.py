"""Load a tap's custom task module and merge it over the base task set."""

from __future__ import annotations

import asyncio
import hashlib
import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType

from taprun import ui
from taprun.tasks.types import ResolutionContext, TaskDefinition, coerce_tasks

logger = logging.getLogger(__name__)

EXPORT_NAME = "tasks"


def _module_name(entry: Path) -> str:
    digest = hashlib.sha256(str(entry.resolve()).encode("utf-8")).hexdigest()[:12]
    return f"taprun_tap_{digest}"


def import_task_module(entry_path: str | Path) -> ModuleType:
    """Import a tap's ``tasks/__init__.py`` as a package.

    Registered in ``sys.modules`` so relative imports inside the tap resolve.
    """
    entry = Path(entry_path)
    if not entry.is_file():
        raise FileNotFoundError(f"Custom task file not found: {entry}")

    name = _module_name(entry)
    spec = importlib.util.spec_from_file_location(
        name,
        entry,
        submodule_search_locations=[str(entry.parent)],
    )
    if spec is None or spec.loader is None:
        raise ImportError(f"Unable to build import spec for {entry}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(name, None)
        raise
    return module


def load_custom_tasks(context: ResolutionContext, entry_path: str | Path) -> dict[str, TaskDefinition]:
    """Merge the tap's exported ``tasks`` over ``context.tasks``.

    ``tasks`` may be a mapping or a callable taking the resolution context
    (sync or async). Any failure is fatal: it is logged with the entry path
    and the process exits with status 1.
    """
    try:
        module = import_task_module(entry_path)
        if not hasattr(module, EXPORT_NAME):
            raise AttributeError(f"module does not export '{EXPORT_NAME}'")

        exported = getattr(module, EXPORT_NAME)
        loaded = exported(context) if callable(exported) else exported
        if inspect.isawaitable(loaded):
            loaded = asyncio.run(_await(loaded))

        custom = coerce_tasks(loaded or {})
    except Exception as exc:
        logger.debug("Custom task load failure", exc_info=True)
        ui.empty()
        ui.warn(f"Error loading custom tasks from path {entry_path}")
        ui.error(str(exc))
        ui.empty()
        raise SystemExit(1) from exc

    logger.debug("Loaded %d custom task(s) from %s", len(custom), entry_path)
    return {**context.tasks, **custom}


async def _await(awaitable):
    return await awaitable
