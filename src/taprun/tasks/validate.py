"""Final gate for a resolved task."""

from __future__ import annotations

import logging

from taprun.errors import TaskDefinitionError
from taprun.tasks.types import TaskDefinition

logger = logging.getLogger(__name__)


def validate_task(
    task: TaskDefinition | None,
    parent: TaskDefinition | None = None,
    help_requested: bool = False,
) -> bool:
    """Check that ``task`` can be handed to the executor.

    Returns False when no task was resolved. A task that requests help is
    still valid; rendering help is the caller's job.

    Raises:
        TaskDefinitionError: If the task has neither an action nor sub-tasks.
    """
    if task is None:
        return False

    if task.action is None and not task.tasks:
        owner = f"{parent.name} {task.name}" if parent else task.name
        raise TaskDefinitionError(f"Task '{owner}' has no action and no sub-tasks")

    if help_requested:
        logger.debug("Help requested for task '%s'", task.name)
    return True
