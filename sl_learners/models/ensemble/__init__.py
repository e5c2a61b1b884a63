"""
Ensemble implementations.

- SuperLearner: V-fold cross-validated stacking with NNLS learner weights

Example:
    from sl_learners.models.ensemble import SuperLearner

    sl = SuperLearner(config={"library": ["mean", "extra_trees"], "cv_folds": 5})
    result = sl.fit(y, X, family="binomial")
    probabilities = result.predict(X_new)
"""
from .super_learner import SuperLearner, SuperLearnerResult, make_folds, take_rows

__all__ = [
    "SuperLearner",
    "SuperLearnerResult",
    "make_folds",
    "take_rows",
]
