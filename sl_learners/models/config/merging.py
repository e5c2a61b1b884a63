"""Configuration merging and building functions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .loaders import find_learner_config, load_learner_config, load_yaml_config, flatten_learner_config
from .validation import validate_config_strict

logger = logging.getLogger(__name__)


def merge_configs(
    base: dict[str, Any],
    override: dict[str, Any],
    deep: bool = True,
) -> dict[str, Any]:
    """Merge configs (override takes precedence, supports deep merge)."""
    result = base.copy()

    for key, value in override.items():
        if deep and key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value, deep=True)
        else:
            result[key] = value

    return result


def build_learner_config(
    learner_name: str,
    overrides: dict[str, Any] | None = None,
    config_file: str | Path | None = None,
    config_dir: Path | None = None,
) -> dict[str, Any]:
    """
    Build learner hyperparameters from multiple sources.

    Configuration precedence (highest to lowest):
    1. Explicit overrides (CLI options, per-learner configs)
    2. Config file (if explicitly provided, FAIL HARD on errors)
    3. Learner-specific YAML (config/models/{learner_name}.yaml)

    Learner defaults fill anything left unset when the learner is created.

    Raises:
        ConfigError: If config_file is explicitly provided and loading fails
        ConfigValidationError: If the merged values have invalid types
    """
    config: dict[str, Any] = {}

    learner_config_path = find_learner_config(learner_name, config_dir)
    if learner_config_path:
        config = merge_configs(
            config,
            load_learner_config(learner_name, config_dir=config_dir, flatten=True),
        )
        logger.debug(f"Merged config from {learner_config_path}")

    if config_file is not None:
        file_config = flatten_learner_config(load_yaml_config(config_file, explicit=True))
        config = merge_configs(config, file_config)
        logger.debug(f"Merged config from {config_file}")

    if overrides:
        config = merge_configs(config, overrides)

    validate_config_strict(config, learner_name)
    return config
