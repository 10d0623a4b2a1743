"""Server configuration.

The configuration is a small YAML mapping, by default read from
`data/config/server_config.yml`. A missing file means "all defaults" so a
bare checkout can start without any setup.
"""
from __future__ import annotations
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from netpaste_lib.ingest.handler import MAX_PASTE_SIZE, READ_CHUNK_SIZE

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path('data/config/server_config.yml')

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigError(ValueError):
    """Raised for unreadable or invalid server configuration."""


@dataclass
class Config:
    http_host: str = "0.0.0.0"
    http_port: int = 8080
    tcp_host: str = "0.0.0.0"
    tcp_port: int = 1337
    max_paste_size: int = MAX_PASTE_SIZE
    read_chunk_size: int = READ_CHUNK_SIZE
    # None keeps raw connections open until the peer closes
    tcp_idle_timeout: Optional[float] = None
    # None retries key generation without limit
    key_max_attempts: Optional[int] = None
    http_timeout_keep_alive: int = 120
    # cap on a request head (request line + headers) in bytes
    http_max_header_size: int = 1 << 20
    log_level: str = "WARNING"


_INT_FIELDS = {'http_port', 'tcp_port', 'max_paste_size', 'read_chunk_size', 'http_timeout_keep_alive', 'http_max_header_size'}
_OPTIONAL_INT_FIELDS = {'key_max_attempts'}
_OPTIONAL_FLOAT_FIELDS = {'tcp_idle_timeout'}
_STR_FIELDS = {'http_host', 'tcp_host', 'log_level'}


def _check_value(name: str, value: Any) -> Any:
    if name in _STR_FIELDS:
        if not isinstance(value, str) or not value:
            raise ConfigError(f"{name} must be a non-empty string")
        if name == 'log_level':
            value = value.upper()
            if value not in LOG_LEVELS:
                raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    if value is None and (name in _OPTIONAL_INT_FIELDS or name in _OPTIONAL_FLOAT_FIELDS):
        return None

    # bool is an int subclass; `true` in YAML is never a sensible size
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number")
    if name in _INT_FIELDS or name in _OPTIONAL_INT_FIELDS:
        if not isinstance(value, int):
            raise ConfigError(f"{name} must be an integer")
    elif not isinstance(value, (int, float)):
        raise ConfigError(f"{name} must be a number")

    if name in ('http_port', 'tcp_port'):
        if not 0 <= value <= 65535:
            raise ConfigError(f"{name} must be between 0 and 65535")
    elif value <= 0:
        raise ConfigError(f"{name} must be positive")
    return value


def config_from_dict(data: dict) -> Config:
    known = {f.name for f in fields(Config)}
    values = {}
    for name, value in data.items():
        if name not in known:
            logger.warning("Ignoring unknown configuration key %r", name)
            continue
        values[name] = _check_value(name, value)
    return Config(**values)


def load_config(path: Optional[Union[str, Path]] = None) -> Config:
    """Load the server configuration from `path` (YAML).

    Returns defaults when the file does not exist. Raises ConfigError for
    malformed YAML, a non-mapping document or invalid values.
    """
    cfg_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        logger.debug("No configuration at %s; using defaults", cfg_path)
        return Config()
    try:
        with cfg_path.open('r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid config format: {e}") from e
    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError("invalid config format: expected mapping")
    return config_from_dict(data)


def config_template(config: Optional[Config] = None) -> str:
    """Render `config` (defaults when None) as a YAML document."""
    return yaml.safe_dump(asdict(config or Config()), sort_keys=False)
