"""
Mean Learner - Weighted outcome mean, the reference learner for a library.

Every prediction is the (observation-weighted) mean of the training outcome.
For binomial outcomes coded 0/1 this is the positive-class rate.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

import numpy as np

from ..base import BaseLearner, LearnerFit, LearnerOutput, as_vector, n_rows
from ..family import Family, binary_indicator
from ..registry import register

logger = logging.getLogger(__name__)


@register(
    name="mean",
    category="classical",
    description="Weighted mean of the outcome",
    aliases=["sl.mean"],
)
class MeanLearner(BaseLearner):
    """Predicts the weighted mean of Y for every row."""

    name = "mean"

    def get_default_config(self) -> Dict[str, Any]:
        return {}

    def fit(
        self,
        Y: Any,
        X: Any,
        new_x: Any = None,
        family: Any = Family.GAUSSIAN,
        obs_weights: Any = None,
        id: Any = None,
        **params: Any,
    ) -> LearnerOutput:
        family = Family.resolve(family)
        y = as_vector(Y)
        y = binary_indicator(y) if family is Family.BINOMIAL else y.astype(float)
        weights = None if obs_weights is None else as_vector(obs_weights).astype(float)
        self._validate_inputs(y, X, weights)

        mean = float(np.average(y, weights=weights))
        logger.debug(f"Mean learner ({family}): mean={mean:.4f}, n_samples={len(y)}")

        fit = LearnerFit(object=mean, family=family, learner=self.name)
        target = X if new_x is None else new_x
        return LearnerOutput(pred=np.full(n_rows(target), mean), fit=fit)

    def predict(
        self,
        fit: LearnerFit,
        newdata: Any,
        family: Any = None,
    ) -> np.ndarray:
        self._validate_fit(fit, family)
        return np.full(n_rows(newdata), float(fit.object))


__all__ = ["MeanLearner"]
