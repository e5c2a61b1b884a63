"""
sl-learners - Base learners and cross-validated stacking.
"""
from .models import (
    BaseLearner,
    ExtraTreesLearner,
    Family,
    LearnerFit,
    LearnerOutput,
    LearnerRegistry,
    MeanLearner,
    SuperLearner,
    SuperLearnerResult,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "BaseLearner",
    "ExtraTreesLearner",
    "Family",
    "LearnerFit",
    "LearnerOutput",
    "LearnerRegistry",
    "MeanLearner",
    "SuperLearner",
    "SuperLearnerResult",
]
