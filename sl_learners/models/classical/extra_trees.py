"""
Extra Trees Learner - Extremely randomized trees as a super learner base learner.

Translates the standard learner calling convention into scikit-learn's
ExtraTreesRegressor (gaussian) and ExtraTreesClassifier (binomial), and
translates predictions back: conditional means for regression and
positive-class probabilities for classification.

References:
    Geurts, P., Ernst, D., & Wehenkel, L. (2006). Extremely randomized trees.
    Machine learning, 63(1), 3-42.
"""
from __future__ import annotations

import logging
import math
import time
from collections.abc import Sequence
from typing import Any, Dict

import numpy as np
import pandas as pd
from sklearn.ensemble import ExtraTreesClassifier, ExtraTreesRegressor

from ..base import BaseLearner, LearnerFit, LearnerOutput, as_vector, n_columns
from ..family import Family, positive_class_index
from ..registry import register

logger = logging.getLogger(__name__)

# camelCase spellings used by other super learner libraries
PARAM_ALIASES = {
    "numRandomCuts": "num_random_cuts",
    "evenCuts": "even_cuts",
    "numThreads": "num_threads",
    "subsetSizes": "subset_sizes",
    "subsetGroups": "subset_groups",
    "probOfTaskCuts": "prob_of_task_cuts",
    "numRandomTaskCuts": "num_random_task_cuts",
    "seed": "random_state",
}

# Accepted for compatibility; scikit-learn has no counterpart
INERT_DEFAULTS: Dict[str, Any] = {
    "num_random_cuts": 1,
    "even_cuts": False,
    "quantile": False,
    "subset_groups": None,
    "tasks": None,
    "num_random_task_cuts": 1,
}


def default_mtry(family: Family, n_features: int) -> int:
    """Candidate features per split: p/3 for regression, sqrt(p) for classification."""
    if family is Family.GAUSSIAN:
        return max(n_features // 3, 1)
    return int(math.floor(math.sqrt(n_features)))


def default_nodesize(family: Family) -> int:
    """Leaf size: 5 for regression, 1 for classification."""
    return 5 if family is Family.GAUSSIAN else 1


@register(
    name="extra_trees",
    category="classical",
    description="Extremely randomized trees (scikit-learn ExtraTrees)",
    aliases=["extratrees", "et"],
)
class ExtraTreesLearner(BaseLearner):
    """
    Extremely randomized trees base learner.

    Hyperparameters use the super learner names and are translated to
    scikit-learn at fit time:

        ntree       -> n_estimators
        mtry        -> max_features
        nodesize    -> min_samples_leaf
        num_threads -> n_jobs
        subset_sizes -> bootstrap=True, max_samples
        verbose     -> verbose
        random_state -> random_state

    mtry and nodesize default to None and resolve per family at fit time.
    Parameters listed in INERT_DEFAULTS, and prob_of_task_cuts, are kept on
    the fit for inspection but do not reach the estimator.
    """

    name = "extra_trees"

    def get_default_config(self) -> Dict[str, Any]:
        return {
            "ntree": 500,
            "mtry": None,
            "nodesize": None,
            "num_random_cuts": 1,
            "even_cuts": False,
            "num_threads": 1,
            "quantile": False,
            "subset_sizes": None,
            "subset_groups": None,
            "tasks": None,
            "prob_of_task_cuts": None,
            "num_random_task_cuts": 1,
            "verbose": False,
            "random_state": None,
        }

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
        """
        Fit extra trees and predict new_x (or X when new_x is None).

        The grouping id is accepted for interface compatibility and unused.
        """
        family = Family.resolve(family)
        y = as_vector(Y)
        weights = None if obs_weights is None else as_vector(obs_weights).astype(float)
        self._validate_inputs(y, X, weights)

        n_features = n_columns(X)
        if n_features == 0:
            raise ValueError("X must contain at least one covariate column")
        resolved = self.resolve_params(family, n_features, **params)
        estimator_params = self.translate_params(resolved)

        if family is Family.BINOMIAL:
            y = self._coerce_labels(y)
            estimator = ExtraTreesClassifier(**estimator_params)
        else:
            estimator = ExtraTreesRegressor(**estimator_params)

        logger.info(
            f"Training ExtraTrees ({family}): n_samples={len(y)}, "
            f"n_features={n_features}, ntree={resolved['ntree']}, "
            f"mtry={resolved['mtry']}, nodesize={resolved['nodesize']}"
        )
        start_time = time.time()
        estimator.fit(X, y, sample_weight=weights)
        logger.info(f"ExtraTrees training complete: time={time.time() - start_time:.2f}s")

        fit = LearnerFit(
            object=estimator,
            family=family,
            learner=self.name,
            params=resolved,
        )
        pred = self._extract(estimator, family, X if new_x is None else new_x)
        return LearnerOutput(pred=pred, fit=fit)

    def predict(
        self,
        fit: LearnerFit,
        newdata: Any,
        family: Any = None,
    ) -> np.ndarray:
        """Predict means (gaussian) or positive-class probabilities (binomial)."""
        fitted_family = self._validate_fit(fit, family)
        return self._extract(fit.object, fitted_family, newdata)

    # =========================================================================
    # PARAMETER TRANSLATION
    # =========================================================================

    def resolve_params(
        self,
        family: Family,
        n_features: int,
        **params: Any,
    ) -> Dict[str, Any]:
        """
        Merge per-call params over the learner config and fill family defaults.

        Unknown parameters are logged and dropped.
        """
        merged = self._config.copy()
        defaults = self.get_default_config()
        for key, value in params.items():
            key = PARAM_ALIASES.get(key, key)
            if key not in defaults:
                logger.warning(f"Ignoring unsupported ExtraTrees parameter '{key}'")
                continue
            merged[key] = value

        if merged["mtry"] is None:
            merged["mtry"] = default_mtry(family, n_features)
        if merged["nodesize"] is None:
            merged["nodesize"] = default_nodesize(family)
        if merged["prob_of_task_cuts"] is None:
            merged["prob_of_task_cuts"] = merged["mtry"] / n_features
        else:
            logger.warning(
                "ExtraTrees parameter 'prob_of_task_cuts' has no scikit-learn "
                "counterpart and is ignored"
            )

        for key, default in INERT_DEFAULTS.items():
            value = merged[key]
            changed = value is not None if default is None else value != default
            if changed and not self._is_grouped_subset(key, merged):
                logger.warning(
                    f"ExtraTrees parameter '{key}'={value!r} has no "
                    f"scikit-learn counterpart and is ignored"
                )

        return merged

    @staticmethod
    def _is_grouped_subset(key: str, params: Dict[str, Any]) -> bool:
        # subset_groups is reported by translate_params instead
        return key == "subset_groups" and params["subset_sizes"] is not None

    @staticmethod
    def translate_params(params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Map resolved learner params to scikit-learn constructor arguments.

        Raises:
            ValueError: If grouped subset sampling is requested
        """
        estimator_params: Dict[str, Any] = {
            "n_estimators": int(params["ntree"]),
            "max_features": int(params["mtry"]),
            "min_samples_leaf": int(params["nodesize"]),
            "n_jobs": params["num_threads"],
            "random_state": params["random_state"],
            "verbose": int(params["verbose"]),
        }

        subset_sizes = params["subset_sizes"]
        if subset_sizes is None:
            return estimator_params

        if params["subset_groups"] is not None or (
            isinstance(subset_sizes, (Sequence, np.ndarray))
            and not isinstance(subset_sizes, str)
        ):
            raise ValueError(
                "Grouped subset sampling (subset_groups or several subset_sizes) "
                "is not supported by scikit-learn ExtraTrees; pass a single "
                "integer subset_sizes instead"
            )

        estimator_params["bootstrap"] = True
        estimator_params["max_samples"] = int(subset_sizes)
        return estimator_params

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _coerce_labels(y: np.ndarray) -> np.ndarray:
        """Treat the outcome as categorical; at least two levels are required."""
        levels = pd.Categorical(y).categories
        if len(levels) < 2:
            raise ValueError(
                f"binomial family requires at least two outcome levels, "
                f"got {list(levels)}"
            )
        return y

    @staticmethod
    def _extract(estimator: Any, family: Family, newdata: Any) -> np.ndarray:
        if family is Family.BINOMIAL:
            if not hasattr(estimator, "predict_proba"):
                raise ValueError(
                    f"Fit is tagged binomial but {type(estimator).__name__} "
                    f"does not produce probabilities"
                )
            probabilities = estimator.predict_proba(newdata)
            column = positive_class_index(estimator.classes_)
            return np.asarray(probabilities[:, column], dtype=float)

        if hasattr(estimator, "predict_proba"):
            raise ValueError(
                f"Fit is tagged gaussian but {type(estimator).__name__} is a classifier"
            )
        return np.asarray(estimator.predict(newdata), dtype=float)


__all__ = [
    "ExtraTreesLearner",
    "default_mtry",
    "default_nodesize",
]
