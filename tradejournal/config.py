"""Configuration for TradeJournal.

Settings live in a TOML file, by default
``~/.config/tradejournal/config.toml``; set ``TRADEJOURNAL_CONFIG`` to use
another file. A missing file simply means defaults.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Optional

import toml

CONFIG_ENV_VAR = "TRADEJOURNAL_CONFIG"
CONFIG_DIR = Path.home() / ".config" / "tradejournal"

DEFAULT_CONFIG = {
    "journal": {
        "db_path": str(CONFIG_DIR / "tradejournal.db"),
        "default_account": 1,
    },
    "logging": {
        "level": "WARNING",
    },
}

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_config_path() -> Path:
    """Path of the active configuration file."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return CONFIG_DIR / "config.toml"


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration merged over the defaults.

    Args:
        config_path: File to read; defaults to ``get_config_path()``.

    Returns:
        Config dict with ``journal`` and ``logging`` sections.

    Raises:
        ValueError: If the file exists but is not valid TOML.
    """
    path = config_path or get_config_path()
    config = copy.deepcopy(DEFAULT_CONFIG)

    if not path.exists():
        return config

    try:
        loaded = toml.load(path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ValueError(f"Could not read config file {path}: {e}") from e

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config


def get_db_path(config: dict) -> Path:
    """Get the database path."""
    return Path(config["journal"]["db_path"]).expanduser()


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write the default configuration if no config file exists yet."""
    path = config_path or get_config_path()
    if path.exists():
        return path

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)
    return path


def setup_logging(config: dict, verbose: bool = False) -> None:
    """Configure root logging from the ``[logging]`` section."""
    if verbose:
        level = logging.DEBUG
    else:
        level_name = str(config.get("logging", {}).get("level", "WARNING")).upper()
        level = getattr(logging, level_name, logging.WARNING)

    logging.basicConfig(level=level, format=LOG_FORMAT)
