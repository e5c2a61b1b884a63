"""
Learner Library - Base learners for cross-validated stacking.

This package adapts third-party estimators to one calling convention so
they can be combined by the super learner.

Quick Start:
-----------
    from sl_learners.models import LearnerRegistry, SuperLearner

    learner = LearnerRegistry.create("extra_trees", config={"ntree": 200})
    output = learner.fit(y, X, family="gaussian")
    pred = learner.predict(output.fit, X_new)

    sl = SuperLearner(config={"library": ["mean", "extra_trees"], "cv_folds": 5})
    result = sl.fit(y, X, family="gaussian")

Architecture:
------------
    BaseLearner: Abstract interface for all learners
    LearnerFit: Fitted-model handle passed back to predict
    LearnerRegistry: Plugin system for learner registration
    SuperLearner: Cross-validated stacking over registered learners

    config/models/*.yaml: Learner-specific hyperparameter defaults
"""
from __future__ import annotations

from .base import (
    BaseLearner,
    LearnerFit,
    LearnerOutput,
)
from .family import Family
from .registry import (
    LearnerRegistry,
    register,
)
from .config import (
    CONFIG_DIR,
    ConfigError,
    ConfigValidationError,
    build_learner_config,
    load_learner_config,
    load_yaml_config,
    merge_configs,
)
from .persistence import load_fit, save_fit

# Auto-import learner implementations to trigger registration
from . import classical  # ExtraTrees, Mean
from .classical import ExtraTreesLearner, MeanLearner
from .ensemble import SuperLearner, SuperLearnerResult

__all__ = [
    # Base classes
    "BaseLearner",
    "LearnerFit",
    "LearnerOutput",
    "Family",
    # Registry
    "LearnerRegistry",
    "register",
    # Configuration
    "CONFIG_DIR",
    "ConfigError",
    "ConfigValidationError",
    "build_learner_config",
    "load_learner_config",
    "load_yaml_config",
    "merge_configs",
    # Persistence
    "save_fit",
    "load_fit",
    # Learners
    "ExtraTreesLearner",
    "MeanLearner",
    "SuperLearner",
    "SuperLearnerResult",
]
