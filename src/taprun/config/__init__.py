"""Global config store."""

from taprun.config.paths import TAP_LINKS, config_home, default_config_path
from taprun.config.store import GlobalConfig

__all__ = [
    "GlobalConfig",
    "TAP_LINKS",
    "config_home",
    "default_config_path",
]
