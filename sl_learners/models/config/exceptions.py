"""Learner configuration exceptions."""
from typing import List, Optional


class ConfigError(Exception):
    """Raised when a learner configuration file cannot be loaded or parsed."""
    pass


class ConfigValidationError(Exception):
    """Raised when learner hyperparameters have invalid types or values."""
    def __init__(self, errors: List[str], learner_name: Optional[str] = None) -> None:
        self.errors = errors
        self.learner_name = learner_name
        prefix = f"Invalid configuration for '{learner_name}'" if learner_name else "Invalid configuration"
        super().__init__(f"{prefix}: {errors}")
