"""Types for task definitions and resolution results."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

from taprun.errors import TaskDefinitionError

if TYPE_CHECKING:
    from taprun.config import GlobalConfig

HELP_TOKENS: frozenset[str] = frozenset({"help", "--help", "-h"})


def has_help_arg(token: str | None) -> bool:
    return token in HELP_TOKENS


@dataclass(frozen=True)
class OptionSpec:
    """Declared option of a task."""

    name: str
    description: str = ""
    alias: tuple[str, ...] = ()
    default: Any = None
    required: bool = False
    example: str = ""

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "OptionSpec":
        alias = data.get("alias", ())
        if isinstance(alias, str):
            alias = (alias,)
        return cls(
            name=name,
            description=str(data.get("description", "")),
            alias=tuple(alias),
            default=data.get("default"),
            required=bool(data.get("required", False)),
            example=str(data.get("example", "")),
        )


@dataclass(frozen=True)
class TaskDefinition:
    """A named, invocable unit with a declared option schema."""

    name: str
    action: Callable[["TaskArgs"], Any] | None = None
    alias: tuple[str, ...] = ()
    description: str = ""
    example: str = ""
    options: dict[str, OptionSpec] = field(default_factory=dict)
    inject: bool = False
    tasks: dict[str, "TaskDefinition"] = field(default_factory=dict)

    def matches(self, command: str) -> bool:
        return command == self.name or command in self.alias

    def with_subtasks(self, **subtasks: "TaskDefinition") -> "TaskDefinition":
        """Return a copy with extra sub-tasks merged over the existing ones."""
        return replace(self, tasks={**self.tasks, **subtasks})

    @classmethod
    def from_dict(cls, key: str, data: Mapping[str, Any]) -> "TaskDefinition":
        """Build a definition from a plain mapping (as contributed by taps)."""
        if not isinstance(data, Mapping):
            raise TaskDefinitionError(f"Task '{key}' must be a mapping, got {type(data).__name__}")

        action = data.get("action")
        if action is not None and not callable(action):
            raise TaskDefinitionError(f"Task '{key}' action is not callable")

        alias = data.get("alias", ())
        if isinstance(alias, str):
            alias = (alias,)

        options_raw = data.get("options") or {}
        if not isinstance(options_raw, Mapping):
            raise TaskDefinitionError(f"Task '{key}' options must be a mapping")
        options = {
            opt_name: spec if isinstance(spec, OptionSpec) else OptionSpec.from_dict(opt_name, spec or {})
            for opt_name, spec in options_raw.items()
        }

        return cls(
            name=str(data.get("name", key)),
            action=action,
            alias=tuple(alias),
            description=str(data.get("description", "")),
            example=str(data.get("example", "")),
            options=options,
            inject=bool(data.get("inject", False)),
            tasks=coerce_tasks(data.get("tasks") or {}),
        )


def coerce_tasks(raw: Mapping[str, Any]) -> dict[str, TaskDefinition]:
    """Normalize a mapping of ``TaskDefinition`` objects or plain dicts."""
    if not isinstance(raw, Mapping):
        raise TaskDefinitionError(f"Task set must be a mapping, got {type(raw).__name__}")
    return {
        key: value if isinstance(value, TaskDefinition) else TaskDefinition.from_dict(key, value)
        for key, value in raw.items()
    }


@dataclass(frozen=True)
class OptionTokens:
    """Raw option tokens plus the bits the resolver derives from them."""

    raw: tuple[str, ...] = ()
    help_requested: bool = False
    injected_tap: str | None = None

    @classmethod
    def from_list(cls, tokens: list[str] | tuple[str, ...]) -> "OptionTokens":
        raw = tuple(tokens)
        return cls(raw=raw, help_requested=bool(raw) and has_help_arg(raw[-1]))

    def with_tap(self, name: str) -> "OptionTokens":
        return replace(self, injected_tap=name)

    def as_list(self) -> list[str]:
        """Positional form; ``tap=<name>`` sits before a trailing help token."""
        tokens = list(self.raw)
        if self.injected_tap is None:
            return tokens
        tap_token = f"tap={self.injected_tap}"
        if self.help_requested:
            tokens.insert(len(tokens) - 1, tap_token)
        else:
            tokens.append(tap_token)
        return tokens


@dataclass(frozen=True)
class InjectedService:
    """A tap's on-disk environment attached to an invocation."""

    app: str
    root: Path
    container: Path | None = None


@dataclass(frozen=True)
class ResolvedTask:
    """A command resolved to one task definition."""

    task: TaskDefinition
    command: str
    tokens: OptionTokens = field(default_factory=OptionTokens)
    params: dict[str, Any] | None = None
    injected: InjectedService | None = None
    parent: TaskDefinition | None = None
    # Task set the command was resolved against, when it differs from the built-ins.
    tasks: dict[str, TaskDefinition] | None = None

    @property
    def options(self) -> list[str]:
        return self.tokens.as_list()


@dataclass(frozen=True)
class ResolutionContext:
    """What a tap's task factory receives."""

    config: "GlobalConfig"
    tasks: dict[str, TaskDefinition]
    command: str
    options: tuple[str, ...]


@dataclass(frozen=True)
class TaskArgs:
    """What a task action receives."""

    command: str
    task: TaskDefinition
    params: dict[str, Any]
    options: list[str]
    tasks: dict[str, TaskDefinition]
    config: "GlobalConfig"
    injected: InjectedService | None = None
