"""
Learner Configuration - YAML hyperparameter loading and override merging.

Precedence: explicit overrides > config file > config/models/<learner>.yaml > learner defaults
"""
from .paths import CONFIG_ROOT, CONFIG_DIR
from .exceptions import ConfigError, ConfigValidationError
from .validation import validate_learner_config, validate_config_strict
from .loaders import (
    load_yaml_config,
    load_learner_config,
    flatten_learner_config,
    find_learner_config,
)
from .merging import merge_configs, build_learner_config

__all__ = [
    # Paths
    "CONFIG_ROOT", "CONFIG_DIR",
    # Exceptions
    "ConfigError", "ConfigValidationError",
    # Validation
    "validate_learner_config", "validate_config_strict",
    # Loaders
    "load_yaml_config", "load_learner_config", "flatten_learner_config",
    "find_learner_config",
    # Merging
    "merge_configs", "build_learner_config",
]
