"""Persisted global config document.

The document is loaded once per invocation, mutated in memory and saved
explicitly. It is passed by reference through the call chain; there is no
module-level cached instance.
"""

from __future__ import annotations

import copy
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

from taprun.config.paths import default_config_path
from taprun.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT: dict[str, Any] = {
    "cli": {
        "taps": {
            "links": {},
        },
    },
}

_MISSING = object()


class GlobalConfig:
    """Mutable global config document bound to a file path."""

    def __init__(self, path: Path, data: dict[str, Any] | None = None) -> None:
        self.path = path
        self.data: dict[str, Any] = data if data is not None else copy.deepcopy(DEFAULT_DOCUMENT)

    @classmethod
    def load(cls, path: Path | None = None) -> "GlobalConfig":
        """Load the config document from disk.

        A missing file yields the default document (nothing is written until
        ``save`` is called).

        Raises:
            ConfigError: If the file cannot be read or parsed, or its top
                level is not a mapping.
        """
        config_path = path or default_config_path()
        if not config_path.exists():
            logger.debug("No global config at %s, using defaults", config_path)
            return cls(config_path)

        try:
            raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ConfigError(f"Malformed global config at {config_path}: {exc}", config_path) from exc
        except OSError as exc:
            raise ConfigError(f"Unable to read global config at {config_path}: {exc}", config_path) from exc

        if raw is None:
            return cls(config_path)
        if not isinstance(raw, dict):
            raise ConfigError(
                f"Invalid global config at {config_path}: expected mapping at top level",
                config_path,
            )
        return cls(config_path, raw)

    def get(self, dotted_path: str, default: Any = None) -> Any:
        current: Any = self.data
        for key in dotted_path.split("."):
            if not isinstance(current, dict):
                return default
            current = current.get(key, _MISSING)
            if current is _MISSING:
                return default
        return current

    def set(self, dotted_path: str, value: Any) -> None:
        """Set a value, replacing non-mapping intermediates with mappings."""
        keys = dotted_path.split(".")
        current = self.data
        for key in keys[:-1]:
            child = current.get(key)
            if not isinstance(child, dict):
                child = {}
                current[key] = child
            current = child
        current[keys[-1]] = value

    def save(self) -> None:
        """Write the document atomically. Failures propagate."""
        rendered = yaml.safe_dump(self.data, sort_keys=True, default_flow_style=False)
        _atomic_write(self.path, rendered)
        logger.debug("Saved global config to %s", self.path)


def _atomic_write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            delete=False,
            prefix=f".{path.name}.",
            suffix=".taprun.tmp",
        ) as tmp_file:
            tmp_file.write(content)
            tmp_path = Path(tmp_file.name)
        os.replace(tmp_path, path)
    except Exception:
        if "tmp_path" in locals() and tmp_path.exists():
            tmp_path.unlink()
        raise
