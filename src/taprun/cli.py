"""taprun CLI - resolve a command (built-in or linked tap) and run it."""

from __future__ import annotations

import typer

from taprun import __version__, ui
from taprun.config import GlobalConfig
from taprun.errors import ConfigError, InjectionError, MissingArgumentError, TaskDefinitionError
from taprun.logs import setup_logging
from taprun.proc import ExecError
from taprun.tasks.builtin import builtin_tasks
from taprun.tasks.execute import execute_task, render_task_list
from taprun.tasks.resolver import find_task

cli = typer.Typer(
    name="taprun",
    help="taprun - task runner with linked tap repositories",
    add_completion=False,
)


def _version_option_callback(value: bool) -> None:
    """Handle eager --version option."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@cli.command(
    add_help_option=False,
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def run(
    ctx: typer.Context,
    command: str | None = typer.Argument(None, help="Task or linked tap name."),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show taprun version and exit.",
        is_eager=True,
        callback=_version_option_callback,
    ),
) -> None:
    """Run COMMAND with any following options forwarded to the task."""
    _ = version
    setup_logging()

    try:
        config = GlobalConfig.load()
    except ConfigError as exc:
        ui.error(str(exc))
        raise typer.Exit(1) from exc

    tasks = builtin_tasks()
    if command is None:
        render_task_list(tasks)
        return

    options = list(ctx.args)
    try:
        resolved = find_task(config, tasks, command, options)
        if resolved is None:
            ui.error(f"Task '{command}' not found")
            ui.info("Run taprun with no arguments to list available tasks.")
            raise typer.Exit(2)
        execute_task(resolved, config, tasks)
    except MissingArgumentError as exc:
        ui.error(str(exc))
        raise typer.Exit(2) from exc
    except (InjectionError, TaskDefinitionError, ExecError) as exc:
        ui.error(str(exc))
        raise typer.Exit(1) from exc


def main() -> None:
    cli()
