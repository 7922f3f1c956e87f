"""Tap links: registry, custom task loading and service injection."""

from taprun.taps.inject import inject_service
from taprun.taps.loader import load_custom_tasks
from taprun.taps.registry import (
    add_link,
    build_tap_registration,
    ensure_overwrite,
    get_link,
    list_links,
    locate_custom_task_entry,
    reconcile_path,
    remove_link,
)
from taprun.taps.types import TapLink

__all__ = [
    "TapLink",
    "add_link",
    "build_tap_registration",
    "ensure_overwrite",
    "get_link",
    "inject_service",
    "list_links",
    "load_custom_tasks",
    "locate_custom_task_entry",
    "reconcile_path",
    "remove_link",
]
