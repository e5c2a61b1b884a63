"""YAML configuration loading functions."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError
from .paths import CONFIG_DIR

logger = logging.getLogger(__name__)


def load_yaml_config(
    path: str | Path,
    explicit: bool = False,
) -> dict[str, Any]:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to YAML configuration file
        explicit: If True, raise ConfigError on any failure (user-requested config).
                 If False, allow FileNotFoundError to propagate (auto-discovery).

    Returns:
        Dictionary with configuration values

    Raises:
        FileNotFoundError: If file doesn't exist and explicit=False
        ConfigError: If explicit=True and loading/parsing fails, or the
            document is not a mapping
        yaml.YAMLError: If file is not valid YAML and explicit=False
    """
    path = Path(path)

    if not path.exists():
        if explicit:
            raise ConfigError(
                f"Configuration file not found: {path.absolute()}\n"
                f"Suggestion: Check that the file exists and the path is correct."
            )
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        error_msg = (
            f"Failed to parse YAML configuration from {path.absolute()}\n"
            f"Error: {e}\n"
            f"Suggestion: Check that the file contains valid YAML syntax."
        )
        if explicit:
            raise ConfigError(error_msg) from e
        raise

    if config is None:
        logger.warning(f"Empty config file: {path}")
        return {}

    if not isinstance(config, dict):
        raise ConfigError(
            f"Configuration in {path.absolute()} must be a mapping, "
            f"got {type(config).__name__}"
        )

    logger.debug(f"Loaded config from {path}: {len(config)} keys")
    return config


def flatten_learner_config(config: dict[str, Any]) -> dict[str, Any]:
    """Flatten structured config (learner/defaults sections) to a flat hyperparameter dict."""
    result = {}

    if "defaults" in config and config["defaults"]:
        result.update(config["defaults"])

    # Include any top-level keys not in known sections
    known_sections = {"learner", "defaults"}
    for key, value in config.items():
        if key not in known_sections:
            result[key] = value

    return result


def find_learner_config(
    learner_name: str,
    config_dir: Path | None = None,
) -> Path | None:
    """Find learner config file if it exists."""
    if config_dir is None:
        config_dir = CONFIG_DIR

    config_path = Path(config_dir) / f"{learner_name}.yaml"
    return config_path if config_path.exists() else None


def load_learner_config(
    learner_name: str,
    config_dir: Path | None = None,
    flatten: bool = True,
    explicit: bool = False,
) -> dict[str, Any]:
    """
    Load learner-specific configuration from YAML.

    Looks for config file at: {config_dir}/{learner_name}.yaml

    Raises:
        ConfigError: If explicit=True and loading fails
        FileNotFoundError: If config file doesn't exist (when not explicit)
    """
    if config_dir is None:
        config_dir = CONFIG_DIR

    config_path = Path(config_dir) / f"{learner_name}.yaml"

    try:
        raw_config = load_yaml_config(config_path, explicit=explicit)
    except FileNotFoundError:
        if explicit:
            raise ConfigError(
                f"Learner configuration not found for '{learner_name}'\n"
                f"Expected location: {config_path.absolute()}"
            )
        raise

    if not flatten:
        return raw_config

    return flatten_learner_config(raw_config)
