"""
Classical learner implementations.

Learners:
- ExtraTreesLearner: Extremely randomized trees (scikit-learn)
- MeanLearner: Weighted outcome mean, the reference learner

All learners auto-register with LearnerRegistry on import.

Example:
    from sl_learners.models import LearnerRegistry
    learner = LearnerRegistry.create("extra_trees", config={"ntree": 200})
    output = learner.fit(y, X, family="gaussian")
"""

from .extra_trees import ExtraTreesLearner
from .mean import MeanLearner

__all__ = [
    "ExtraTreesLearner",
    "MeanLearner",
]
