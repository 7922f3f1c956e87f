"""Built-in task set."""

from taprun.tasks.builtin.config import CONFIG_TASK
from taprun.tasks.builtin.tap import TAP_TASK
from taprun.tasks.types import TaskDefinition


def builtin_tasks() -> dict[str, TaskDefinition]:
    """Fresh mapping of the built-in tasks, keyed by name."""
    return {
        TAP_TASK.name: TAP_TASK,
        CONFIG_TASK.name: CONFIG_TASK,
    }


__all__ = ["CONFIG_TASK", "TAP_TASK", "builtin_tasks"]
