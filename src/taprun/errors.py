"""Error taxonomy for taprun."""

from __future__ import annotations


class TaprunError(Exception):
    """Base class for recoverable taprun errors."""


class ConfigError(TaprunError):
    """Global config document could not be loaded or is malformed."""

    def __init__(self, message: str, path: object | None = None) -> None:
        super().__init__(message)
        self.path = path


class TaskDefinitionError(TaprunError):
    """A task definition has an invalid shape."""


class MissingArgumentError(TaprunError):
    """A required task option was not supplied."""

    def __init__(self, task_name: str, option: str) -> None:
        super().__init__(f"Task '{task_name}' requires option '{option}'")
        self.task_name = task_name
        self.option = option


class InjectionError(TaprunError):
    """A tap path lacks the structure needed for service injection."""

    def __init__(self, message: str, path: object | None = None) -> None:
        super().__init__(message)
        self.path = path
