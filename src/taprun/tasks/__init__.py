"""Task definitions, lookup and resolution."""

from taprun.tasks.lookup import get_task
from taprun.tasks.types import (
    InjectedService,
    OptionSpec,
    OptionTokens,
    ResolutionContext,
    ResolvedTask,
    TaskArgs,
    TaskDefinition,
)

__all__ = [
    "InjectedService",
    "OptionSpec",
    "OptionTokens",
    "ResolutionContext",
    "ResolvedTask",
    "TaskArgs",
    "TaskDefinition",
    "get_task",
]
