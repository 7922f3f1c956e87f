"""Task lookup by name or alias with sub-task descent."""

from __future__ import annotations

from collections.abc import Mapping

from taprun.tasks.types import OptionTokens, ResolvedTask, TaskDefinition


def match_task(tasks: Mapping[str, TaskDefinition], command: str) -> TaskDefinition | None:
    """Find a task by key first, then by name or alias."""
    direct = tasks.get(command)
    if direct is not None:
        return direct
    for task in tasks.values():
        if task.matches(command):
            return task
    return None


def get_task(tasks: Mapping[str, TaskDefinition], command: str, *options: str) -> ResolvedTask | None:
    """Resolve ``command`` against ``tasks``.

    While the next option token names a sub-task of the current task, descend
    into it and consume the token. Remaining tokens become the invocation's
    options.
    """
    task = match_task(tasks, command)
    if task is None:
        return None

    parent: TaskDefinition | None = None
    remaining = list(options)
    while remaining and task.tasks:
        sub = match_task(task.tasks, remaining[0])
        if sub is None:
            break
        parent, task = task, sub
        remaining.pop(0)

    return ResolvedTask(
        task=task,
        command=command,
        tokens=OptionTokens.from_list(remaining),
        parent=parent,
    )
