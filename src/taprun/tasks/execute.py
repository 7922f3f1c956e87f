"""Run a resolved task or render its help."""

from __future__ import annotations

import logging
from typing import Any

from taprun import ui
from taprun.config import GlobalConfig
from taprun.tasks.args import parse_args
from taprun.tasks.types import ResolvedTask, TaskArgs, TaskDefinition

logger = logging.getLogger(__name__)


def _default_label(value: Any) -> str:
    if value is None:
        return ""
    if callable(value):
        return "<dynamic>"
    return str(value)


def render_task_help(task: TaskDefinition, parent: TaskDefinition | None = None) -> None:
    title = f"{parent.name} {task.name}" if parent else task.name
    ui.console.print(f"[bold cyan]{title}[/bold cyan]")
    if task.alias:
        ui.spaced("Alias:", ", ".join(task.alias))
    if task.description:
        ui.spaced("Description:", task.description)
    if task.example:
        ui.spaced("Example:", task.example)
    ui.empty()

    if task.options:
        ui.render_table(
            "Options",
            ["Name", "Alias", "Required", "Default", "Description"],
            [
                [
                    name,
                    ", ".join(spec.alias),
                    "yes" if spec.required else "",
                    _default_label(spec.default),
                    spec.description,
                ]
                for name, spec in task.options.items()
            ],
        )
        ui.empty()

    if task.tasks:
        render_task_list(task.tasks, title="Tasks")


def render_task_list(tasks: dict[str, TaskDefinition], title: str = "Available tasks") -> None:
    ui.render_table(
        title,
        ["Name", "Alias", "Description"],
        [[task.name, ", ".join(task.alias), task.description] for _, task in sorted(tasks.items())],
    )


def execute_task(
    resolved: ResolvedTask,
    config: GlobalConfig,
    tasks: dict[str, TaskDefinition],
) -> Any:
    """Call the task's action, or render help when requested or no action exists.

    Raises:
        MissingArgumentError: If a required option is missing.
    """
    task = resolved.task
    if resolved.tokens.help_requested or task.action is None:
        render_task_help(task, resolved.parent)
        return None

    params = resolved.params
    if params is None:
        params = parse_args(task, resolved.tokens.raw, config)

    logger.debug("Executing task '%s' with params %s", task.name, params)
    return task.action(
        TaskArgs(
            command=resolved.command,
            task=task,
            params=params,
            options=resolved.options,
            tasks=resolved.tasks if resolved.tasks is not None else tasks,
            config=config,
            injected=resolved.injected,
        )
    )
