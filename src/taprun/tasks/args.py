"""Parse raw option tokens against a task's declared option schema."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from taprun.errors import MissingArgumentError
from taprun.tasks.types import TaskDefinition, has_help_arg

if TYPE_CHECKING:
    from taprun.config import GlobalConfig

logger = logging.getLogger(__name__)

POSITIONAL_KEY = "_"

_TRUE = {"true", "yes", "1", "on"}
_FALSE = {"false", "no", "0", "off"}


def _alias_map(task: TaskDefinition) -> dict[str, str]:
    lookup: dict[str, str] = {}
    for name, spec in task.options.items():
        lookup[name] = name
        for alias in spec.alias:
            lookup[alias] = name
    return lookup


def _coerce(task: TaskDefinition, name: str, value: Any) -> Any:
    spec = task.options.get(name)
    if spec is None or not isinstance(spec.default, bool) or not isinstance(value, str):
        return value
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return value


def _is_flag(token: str) -> bool:
    return token.startswith("-") and len(token) > 1 and not token[1:].replace(".", "").isdigit()


def parse_args(
    task: TaskDefinition,
    tokens: Sequence[str],
    config: "GlobalConfig | None" = None,
    params: Mapping[str, Any] | None = None,
    *,
    enforce_required: bool = True,
) -> dict[str, Any]:
    """Turn option tokens into a params mapping for ``task``.

    Supported forms: ``--name value``, ``--name=value``, ``--flag``,
    ``-a value`` (alias), ``name=value`` and bare positional values, which
    fill declared options in declaration order. Values in ``params`` win
    over parsed ones. Help tokens are skipped and disable the required
    check.

    Raises:
        MissingArgumentError: If a required option has no value.
    """
    _ = config
    aliases = _alias_map(task)
    parsed: dict[str, Any] = {}
    positionals: list[str] = []
    help_requested = False

    items = list(tokens)
    i = 0
    while i < len(items):
        token = items[i]
        i += 1

        if has_help_arg(token):
            help_requested = True
            continue

        if _is_flag(token):
            key = token.lstrip("-")
            value: Any
            if "=" in key:
                key, value = key.split("=", 1)
            elif i < len(items) and not _is_flag(items[i]) and not has_help_arg(items[i]) and "=" not in items[i]:
                spec = task.options.get(aliases.get(key, key))
                if spec is not None and isinstance(spec.default, bool) and items[i].lower() not in _TRUE | _FALSE:
                    value = True
                else:
                    value = items[i]
                    i += 1
            else:
                value = True
            name = aliases.get(key, key)
            parsed[name] = _coerce(task, name, value)
            continue

        if "=" in token:
            key, value = token.split("=", 1)
            name = aliases.get(key, key)
            parsed[name] = _coerce(task, name, value)
            continue

        positionals.append(token)

    # Positionals never fill boolean options.
    unset = [
        name
        for name, spec in task.options.items()
        if name not in parsed and name not in (params or {}) and not isinstance(spec.default, bool)
    ]
    for name in list(unset):
        if not positionals:
            break
        parsed[name] = _coerce(task, name, positionals.pop(0))
        unset.remove(name)

    if positionals:
        logger.debug("Task '%s' received extra positional values: %s", task.name, positionals)
        parsed[POSITIONAL_KEY] = positionals

    result: dict[str, Any] = {**parsed, **(params or {})}

    for name, spec in task.options.items():
        if name in result:
            continue
        if spec.default is not None:
            result[name] = spec.default() if callable(spec.default) else spec.default
        elif spec.required and enforce_required and not help_requested:
            raise MissingArgumentError(task.name, name)

    return result
