"""Configuration validation functions."""
from __future__ import annotations

from numbers import Integral, Real
from typing import Any

from .exceptions import ConfigValidationError

INTEGER_PARAMS = {
    "ntree": 1,
    "mtry": 1,
    "nodesize": 1,
    "num_random_cuts": 1,
    "num_random_task_cuts": 1,
}

BOOLEAN_PARAMS = ("even_cuts", "quantile", "verbose")


def _is_integer(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def validate_learner_config(config: dict[str, Any], learner_name: str) -> list[str]:
    """Validate flattened hyperparameters (types and lower bounds only)."""
    errors = []

    for key, minimum in INTEGER_PARAMS.items():
        value = config.get(key)
        if value is None:
            continue
        if not _is_integer(value):
            errors.append(f"{learner_name}.{key} must be an integer, got {value!r}")
        elif value < minimum:
            errors.append(f"{learner_name}.{key} must be >= {minimum}, got {value}")

    for key in BOOLEAN_PARAMS:
        value = config.get(key)
        if value is not None and not isinstance(value, bool):
            errors.append(f"{learner_name}.{key} must be a boolean, got {value!r}")

    num_threads = config.get("num_threads")
    if num_threads is not None and not _is_integer(num_threads):
        errors.append(f"{learner_name}.num_threads must be an integer, got {num_threads!r}")

    prob = config.get("prob_of_task_cuts")
    if prob is not None and (
        not isinstance(prob, Real) or isinstance(prob, bool) or not 0.0 <= prob <= 1.0
    ):
        errors.append(f"{learner_name}.prob_of_task_cuts must be in [0, 1], got {prob!r}")

    return errors


def validate_config_strict(config: dict[str, Any], learner_name: str) -> None:
    """Validate config and raise ConfigValidationError on any problem."""
    errors = validate_learner_config(config, learner_name)
    if errors:
        raise ConfigValidationError(errors, learner_name=learner_name)
