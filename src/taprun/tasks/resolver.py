"""Map an invoked command to one task, rerouting linked taps.

Tap links are checked before built-ins: a command that names a linked tap
is forwarded to the generic ``tap`` task with ``tap=<command>`` injected,
after the tap's custom tasks (if any) are merged over the base set.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from taprun.config import GlobalConfig
from taprun.taps.inject import inject_service
from taprun.taps.loader import load_custom_tasks
from taprun.taps.registry import get_link
from taprun.tasks.args import parse_args
from taprun.tasks.lookup import get_task
from taprun.tasks.types import ResolutionContext, ResolvedTask, TaskDefinition
from taprun.tasks.validate import validate_task

logger = logging.getLogger(__name__)

TAP_TASK = "tap"


def check_linked_taps(
    config: GlobalConfig,
    tasks: dict[str, TaskDefinition],
    command: str,
    options: Sequence[str],
) -> ResolvedTask | None:
    """Reroute ``command`` through the ``tap`` task when it names a linked tap."""
    link = get_link(config, command)
    if link is None or not link.configured:
        return None

    all_tasks = tasks
    if link.tasks:
        context = ResolutionContext(config=config, tasks=tasks, command=command, options=tuple(options))
        all_tasks = load_custom_tasks(context, link.tasks)

    resolved = get_task(all_tasks, TAP_TASK, *options)
    if resolved is None:
        logger.warning("No '%s' task available to handle linked tap '%s'", TAP_TASK, command)
        return None

    params = parse_args(resolved.task, resolved.tokens.raw, config, params={TAP_TASK: command})
    resolved = replace(
        resolved,
        command=command,
        params=params,
        tokens=resolved.tokens.with_tap(command),
        tasks=all_tasks,
    )
    logger.debug("Rerouted '%s' to task '%s' via tap link %s", command, resolved.task.name, link.path)

    if not resolved.task.inject:
        return resolved
    return inject_service(resolved, app_name=command, inject_path=link.path)


def find_task(
    config: GlobalConfig,
    tasks: dict[str, TaskDefinition],
    command: str,
    options: Sequence[str],
) -> ResolvedTask | None:
    """Resolve ``command``; None when nothing matches."""
    resolved = check_linked_taps(config, tasks, command, options) or get_task(tasks, command, *options)
    if resolved is None or not validate_task(resolved.task, resolved.parent, resolved.tokens.help_requested):
        logger.debug("No task found for command %r", command)
        return None
    return resolved
