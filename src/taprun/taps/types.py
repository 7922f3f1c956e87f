"""Types for tap links."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TapLink:
    """A tap registered in the global config, keyed by ``name``."""

    name: str
    path: str
    tasks: str | None = None

    @property
    def configured(self) -> bool:
        return isinstance(self.path, str) and bool(self.path)

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "TapLink":
        tasks = data.get("tasks")
        return cls(
            name=name,
            path=str(data.get("path") or ""),
            tasks=str(tasks) if tasks else None,
        )

    def to_dict(self) -> dict[str, str]:
        record = {"path": self.path}
        if self.tasks:
            record["tasks"] = self.tasks
        return record
