"""Built-in ``tap`` task group: the generic handler for linked taps."""

from __future__ import annotations

import os

import typer

from taprun import proc, ui
from taprun.taps.registry import add_link, build_tap_registration, get_link, list_links, remove_link
from taprun.tasks.types import OptionSpec, TaskArgs, TaskDefinition


def show_tap(args: TaskArgs) -> None:
    """Print where a linked tap lives and whether it has custom tasks."""
    name = args.params["tap"]
    link = get_link(args.config, name)
    if link is None or not link.configured:
        ui.warn(f"Tap '{name}' is not linked. Try: taprun tap link --name {name}")
        raise typer.Exit(1)
    ui.spaced("Tap:", link.name)
    ui.spaced("Path:", link.path)
    ui.spaced("Tasks:", link.tasks or "-")


def link_tap(args: TaskArgs) -> None:
    name = args.params["name"]
    location = str(args.params["location"])
    silent = bool(args.params.get("silent"))

    link = build_tap_registration(args.config, silent, name, location)
    if link is not None:
        add_link(args.config, name, link)
    elif not silent:
        ui.warn("Tap link canceled!")
        ui.empty()


def unlink_tap(args: TaskArgs) -> None:
    name = args.params["name"]
    if remove_link(args.config, name):
        ui.success(f"Removed tap link '{name}'")
    else:
        ui.warn(f"No tap link named '{name}'")


def list_taps(args: TaskArgs) -> None:
    links = list_links(args.config)
    if not links:
        ui.info("No taps linked.")
        return
    ui.render_table(
        "Linked taps",
        ["Name", "Path", "Tasks"],
        [[link.name, link.path, link.tasks or "-"] for link in links],
    )


def run_in_tap(args: TaskArgs) -> None:
    """Run a command inside the tap's root directory."""
    if args.injected is None:
        ui.error(f"'{args.command}' is not a linked tap; nothing to run in.")
        raise typer.Exit(1)

    cmd = str(args.params["cmd"])
    try:
        result = proc.run(cmd, cwd=args.injected.root, check=True)
    except (OSError, ValueError) as exc:
        ui.error(f"Unable to run '{cmd}' in tap '{args.command}' ({args.injected.root}): {exc}")
        raise typer.Exit(1) from exc

    if result.data:
        ui.info(result.data.rstrip("\n"))


TAP_OPTION = OptionSpec(
    name="tap",
    description="Name of the linked tap",
    required=True,
)

NAME_OPTION = OptionSpec(
    name="name",
    description="Name used to access the linked tap",
    required=True,
)

TAP_TASK = TaskDefinition(
    name="tap",
    alias=("tp",),
    action=show_tap,
    description="Runs commands against a linked tap",
    example="taprun <tap-name> [task] <options>",
    options={"tap": TAP_OPTION},
    tasks={
        "link": TaskDefinition(
            name="link",
            alias=("ln",),
            action=link_tap,
            description="Links a tap's path to the global config",
            example="taprun tap link --name my-tap --location ~/taps/my-tap",
            options={
                "name": NAME_OPTION,
                "location": OptionSpec(
                    name="location",
                    alias=("path", "loc"),
                    description="Location of the local tap directory",
                    default=os.getcwd,
                ),
                "silent": OptionSpec(
                    name="silent",
                    description="Skip prompts; never overwrite an existing link",
                    default=False,
                ),
            },
        ),
        "unlink": TaskDefinition(
            name="unlink",
            alias=("rm",),
            action=unlink_tap,
            description="Removes a tap link from the global config",
            example="taprun tap unlink --name my-tap",
            options={"name": NAME_OPTION},
        ),
        "list": TaskDefinition(
            name="list",
            alias=("ls",),
            action=list_taps,
            description="Lists linked taps",
            example="taprun tap list",
        ),
        "run": TaskDefinition(
            name="run",
            action=run_in_tap,
            description="Runs a command inside a linked tap's directory",
            example='taprun my-tap run cmd="make build"',
            inject=True,
            options={
                "tap": TAP_OPTION,
                "cmd": OptionSpec(
                    name="cmd",
                    alias=("c",),
                    description="Command to run",
                    required=True,
                ),
            },
        ),
    },
)
