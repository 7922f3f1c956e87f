"""Global config locations and well-known document paths."""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_HOME_ENV = "TAPRUN_CONFIG_HOME"
CONFIG_FILENAME = "config.yaml"

TAP_LINKS = "cli.taps.links"


def config_home() -> Path:
    override = os.getenv(CONFIG_HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".taprun"


def default_config_path() -> Path:
    return config_home() / CONFIG_FILENAME
