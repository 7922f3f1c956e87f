"""CRUD over the tap-link section of the global config."""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path

from taprun import ui
from taprun.config import TAP_LINKS, GlobalConfig
from taprun.taps.types import TapLink

logger = logging.getLogger(__name__)

TASKS_DIRNAME = "tasks"
TASKS_INDEX = "__init__.py"

SEARCH_EXCLUDES: frozenset[str] = frozenset(
    {".git", ".hg", "node_modules", ".venv", "venv", "__pycache__", ".tox", ".mypy_cache", ".pytest_cache"}
)


def _links(config: GlobalConfig) -> dict:
    links = config.get(TAP_LINKS)
    return links if isinstance(links, dict) else {}


def get_link(config: GlobalConfig, name: str) -> TapLink | None:
    record = _links(config).get(name)
    if not isinstance(record, dict):
        return None
    return TapLink.from_dict(name, record)


def list_links(config: GlobalConfig) -> list[TapLink]:
    return [
        TapLink.from_dict(name, record)
        for name, record in sorted(_links(config).items())
        if isinstance(record, dict)
    ]


def add_link(config: GlobalConfig, name: str, link: TapLink) -> None:
    """Store ``link`` under ``name`` and persist the config."""
    if not isinstance(config.get(TAP_LINKS), dict):
        config.set(TAP_LINKS, {})

    # Tap names may contain dots, so the record is keyed directly.
    config.get(TAP_LINKS)[name] = link.to_dict()
    config.save()

    ui.success(f"Successfully linked tap '{name}' => '{link.path}'")
    ui.empty()


def remove_link(config: GlobalConfig, name: str) -> bool:
    """Delete the link for ``name`` and persist. Returns False if absent."""
    links = _links(config)
    if name not in links:
        return False
    del links[name]
    config.save()
    return True


def ensure_overwrite(existing: TapLink | None, name: str, new_path: str, silent: bool) -> bool:
    """Decide whether a link for ``name`` may be written.

    Silent mode never overwrites an existing link.
    """
    if existing is None or not new_path:
        return True
    if silent:
        logger.debug("Tap '%s' already linked; silent mode leaves it in place", name)
        return False
    return ui.confirm(f"Overwrite tap link '{name}' => '{new_path}'?")


def locate_custom_task_entry(tap_root: str | Path) -> Path | None:
    """Find ``tasks/__init__.py`` inside the tap repository.

    The first directory named ``tasks`` found breadth-first (siblings in
    sorted order) is used. Symlinked directories are not followed. A missing
    index file is a warning, not an error.
    """
    root = Path(tap_root)
    if not root.is_dir():
        return None

    found: Path | None = None
    queue: deque[Path] = deque([root])
    while queue:
        current = queue.popleft()
        try:
            children = sorted(p for p in current.iterdir() if p.is_dir() and not p.is_symlink())
        except OSError as exc:
            logger.debug("Skipping unreadable directory %s: %s", current, exc)
            continue
        for child in children:
            if child.name == TASKS_DIRNAME:
                found = child
                break
            if child.name not in SEARCH_EXCLUDES:
                queue.append(child)
        if found is not None:
            break

    if found is None:
        return None

    index_file = found / TASKS_INDEX
    if not index_file.is_file():
        ui.warn(f"Linked tap task folder exists, but {TASKS_INDEX} file is missing! ({found})")
        return None
    return index_file


def reconcile_path(link: TapLink, new_location: str) -> TapLink:
    if link.path != new_location:
        return TapLink(name=link.name, path=new_location, tasks=link.tasks)
    return link


def build_tap_registration(
    config: GlobalConfig,
    silent: bool,
    name: str,
    location: str,
) -> TapLink | None:
    """Compose the link to store for ``name``, or None if the overwrite was declined."""
    existing = get_link(config, name)
    if not ensure_overwrite(existing, name, location, silent):
        return None

    link = reconcile_path(existing or TapLink(name=name, path=""), location)

    # Task entry is re-detected from the (possibly new) path; the old one is not carried over.
    entry = locate_custom_task_entry(link.path)
    return TapLink(name=link.name, path=link.path, tasks=str(entry) if entry else None)
