from .config import (
    DEFAULT_CONFIG_PATH,
    Config,
    ConfigError,
    config_from_dict,
    config_template,
    load_config,
)

__all__ = [
    "Config",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "config_from_dict",
    "config_template",
    "load_config",
]
