"""
Config loader for the recent mover.

This module is responsible for:
- Locating the per-user config file (~/.config/m/m.json)
- Writing a default config on first run
- Parsing and validating the JSON document
- Raising ConfigError with a clear diagnostic for anything malformed

On-disk field names are kept as "source_dir" (a list, despite the name),
"time_limit" (minutes) and the optional "black_list".
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from .errors import ConfigError
from .types import Config
from .utils import normalize_path

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = "m"
CONFIG_FILE_NAME = "m.json"
DEFAULT_TIME_LIMIT_MINUTES = 20


def default_config_path() -> Path:
    """Return the per-user config file location."""
    return Path.home() / ".config" / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def default_config() -> Config:
    """Return the config written on first run."""
    return Config(
        source_dirs=[Path.home() / "Downloads"],
        time_limit_minutes=DEFAULT_TIME_LIMIT_MINUTES,
        black_list=[],
    )


def config_to_dict(config: Config) -> Dict[str, Any]:
    """Convert a Config to its on-disk JSON shape."""
    return {
        "source_dir": [str(d) for d in config.source_dirs],
        "time_limit": config.time_limit_minutes,
        "black_list": list(config.black_list),
    }


def save_config(config: Config, path: Union[str, Path]) -> None:
    """
    Write a config to disk as pretty-printed UTF-8 JSON.

    Raises:
        ConfigError: If the file or its parent directory cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(config_to_dict(config), indent=2) + "\n",
            encoding="utf-8",
        )
    except OSError as e:
        raise ConfigError(f"Could not write config file {path}: {e}") from e


def _string_list(data: Dict[str, Any], key: str, path: Path) -> List[str]:
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' in {path} must be an array of strings")
    return value


def parse_config(data: Any, path: Union[str, Path] = "<config>") -> Config:
    """
    Validate a decoded JSON document and build a Config.

    Args:
        data: The decoded JSON value
        path: Config location, used in error messages

    Returns:
        Validated Config with source directories expanded to absolute paths

    Raises:
        ConfigError: If a required field is missing or has the wrong type
    """
    path = Path(path)

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")

    missing = [key for key in ("source_dir", "time_limit") if key not in data]
    if missing:
        raise ConfigError(
            f"Config file {path} is missing required fields: {', '.join(missing)}"
        )

    source_dirs = _string_list(data, "source_dir", path)

    time_limit = data["time_limit"]
    # bool is a subclass of int; "time_limit": true is not a valid window
    if isinstance(time_limit, bool) or not isinstance(time_limit, int) or time_limit <= 0:
        raise ConfigError(f"'time_limit' in {path} must be a positive integer")

    black_list: List[str] = []
    if "black_list" in data:
        black_list = _string_list(data, "black_list", path)

    return Config(
        source_dirs=[normalize_path(d) for d in source_dirs],
        time_limit_minutes=time_limit,
        black_list=black_list,
    )


def load_config(path: Union[str, Path, None] = None) -> Config:
    """
    Load the config file, creating it with defaults if it does not exist.

    Args:
        path: Config file location (defaults to default_config_path())

    Returns:
        The loaded (or freshly created) Config

    Raises:
        ConfigError: If the file exists but cannot be read, is not valid JSON,
                     or fails validation; or if the default cannot be written
    """
    path = Path(path) if path is not None else default_config_path()

    if not path.exists():
        config = default_config()
        save_config(config, path)
        logger.info(f"Created default configuration file at: {path}")
        return config

    logger.debug(f"Loading config from: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e

    config = parse_config(data, path)
    logger.debug(
        f"Loaded config: {len(config.source_dirs)} source dirs, "
        f"{config.time_limit_minutes} minute window"
    )
    return config
