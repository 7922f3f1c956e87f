"""Built-in ``config`` task group."""

from __future__ import annotations

import yaml

from taprun import ui
from taprun.tasks.types import OptionSpec, TaskArgs, TaskDefinition


def config_path(args: TaskArgs) -> None:
    ui.info(str(args.config.path))


def config_get(args: TaskArgs) -> None:
    key = args.params.get("key")
    value = args.config.get(key) if key else args.config.data
    if isinstance(value, (dict, list)):
        ui.info(yaml.safe_dump(value, sort_keys=True, default_flow_style=False).rstrip("\n"))
    elif value is None:
        ui.warn(f"No value at '{key}'")
    else:
        ui.info(str(value))


CONFIG_TASK = TaskDefinition(
    name="config",
    alias=("cfg",),
    description="Inspects the global config",
    example="taprun config get cli.taps.links",
    tasks={
        "path": TaskDefinition(
            name="path",
            action=config_path,
            description="Prints the global config location",
        ),
        "get": TaskDefinition(
            name="get",
            action=config_get,
            description="Prints a value by dotted key (whole document when omitted)",
            options={
                "key": OptionSpec(name="key", description="Dotted key, e.g. cli.taps.links"),
            },
        ),
    },
)
