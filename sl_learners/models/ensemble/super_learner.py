"""
Super Learner - V-fold cross-validated stacking of registered learners.

Architecture:
1. Layer 1: Every library learner is fitted on V-1 folds and predicts the
   held-out fold, producing the cross-validated prediction matrix Z (n x k).
2. Layer 2: Non-negative least squares of Y on Z gives the learner weights,
   normalized to sum to one.
3. Every learner is refitted on the full data; predictions are the weighted
   combination of the library predictions.

When grouping ids are supplied, all rows sharing an id stay in the same
fold so no unit is used for both training and validation.

References:
    van der Laan, M. J., Polley, E. C., & Hubbard, A. E. (2007).
    Super learner. Statistical Applications in Genetics and Molecular
    Biology, 6(1).
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
from scipy.optimize import nnls
from sklearn.model_selection import GroupKFold, KFold

from ..base import BaseLearner, LearnerFit, as_vector, n_rows
from ..family import Family, binary_indicator
from ..registry import LearnerRegistry

logger = logging.getLogger(__name__)


# =============================================================================
# FOLDS
# =============================================================================

def make_folds(
    n_samples: int,
    cv_folds: int,
    id: Optional[np.ndarray] = None,
    shuffle: bool = True,
    random_state: Optional[int] = None,
) -> List[Tuple[np.ndarray, np.ndarray]]:
    """
    Build (train_idx, valid_idx) pairs for V-fold cross-validation.

    Raises:
        ValueError: If cv_folds < 2 or exceeds the number of rows / groups
    """
    if cv_folds < 2:
        raise ValueError(f"cv_folds must be >= 2, got {cv_folds}")

    placeholder = np.zeros(n_samples)

    if id is not None:
        groups = as_vector(id)
        if len(groups) != n_samples:
            raise ValueError(
                f"id length ({len(groups)}) != number of rows ({n_samples})"
            )
        n_groups = len(np.unique(groups))
        if cv_folds > n_groups:
            raise ValueError(
                f"cv_folds ({cv_folds}) cannot exceed the number of ids ({n_groups})"
            )
        splitter = GroupKFold(n_splits=cv_folds)
        return list(splitter.split(placeholder, groups=groups))

    if cv_folds > n_samples:
        raise ValueError(
            f"cv_folds ({cv_folds}) cannot exceed the number of rows ({n_samples})"
        )
    splitter = KFold(
        n_splits=cv_folds,
        shuffle=shuffle,
        random_state=random_state if shuffle else None,
    )
    return list(splitter.split(placeholder))


def take_rows(X: Any, index: np.ndarray) -> Any:
    """Positional row selection for DataFrames and arrays."""
    if isinstance(X, (pd.DataFrame, pd.Series)):
        return X.iloc[index]
    return np.asarray(X)[index]


# =============================================================================
# RESULT
# =============================================================================

@dataclass
class SuperLearnerResult:
    """
    Fitted super learner.

    Attributes:
        pred: Weighted predictions for the prediction targets, shape (m,)
        library_predict: Per-learner predictions, shape (m, k)
        coef: Non-negative learner weights summing to one, shape (k,)
        cv_risk: Cross-validated weighted mean squared error per learner
        Z: Cross-validated predictions on the training rows, shape (n, k)
        fits: Full-data LearnerFit per library learner
        learners: Learner instances used to predict from the fits
        family: Family the library was fitted under
        library: Learner names, in column order
        folds: (train_idx, valid_idx) pairs used for cross-validation
    """
    pred: np.ndarray
    library_predict: np.ndarray
    coef: np.ndarray
    cv_risk: np.ndarray
    Z: np.ndarray
    fits: Dict[str, LearnerFit]
    learners: Dict[str, BaseLearner]
    family: Family
    library: List[str]
    folds: List[Tuple[np.ndarray, np.ndarray]] = field(default_factory=list)

    def predict(self, newdata: Any, only_learners: bool = False) -> np.ndarray:
        """Weighted prediction, or the (m, k) library matrix when only_learners."""
        columns = [
            self.learners[name].predict(self.fits[name], newdata, family=self.family)
            for name in self.library
        ]
        library_predict = np.column_stack(columns)
        if only_learners:
            return library_predict
        return library_predict @ self.coef

    def summary(self) -> pd.DataFrame:
        """Risk and weight per learner."""
        return pd.DataFrame(
            {"risk": self.cv_risk, "coef": self.coef},
            index=pd.Index(self.library, name="learner"),
        )


# =============================================================================
# SUPER LEARNER
# =============================================================================

class SuperLearner:
    """
    Cross-validated stacking over a library of registered learners.

    Example:
        sl = SuperLearner(config={
            "library": ["mean", "extra_trees"],
            "learner_configs": {"extra_trees": {"ntree": 200}},
            "cv_folds": 5,
            "random_state": 1,
        })
        result = sl.fit(y, X, family="gaussian")
        result.summary()
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self._config = self.get_default_config()
        if config:
            self._config.update(config)

        library = [name.lower().strip() for name in self._config["library"]]
        if not library:
            raise ValueError("library must name at least one learner")
        if len(set(library)) != len(library):
            raise ValueError(f"library contains duplicate learners: {library}")
        self._library = library

    @property
    def config(self) -> Dict[str, Any]:
        return self._config

    @property
    def library(self) -> List[str]:
        return list(self._library)

    def get_default_config(self) -> Dict[str, Any]:
        return {
            "library": ["mean", "extra_trees"],
            "learner_configs": {},
            "cv_folds": 10,
            "shuffle": True,
            "random_state": None,
        }

    def _create_learners(self) -> Dict[str, BaseLearner]:
        learner_configs = {
            name.lower().strip(): config
            for name, config in (self._config.get("learner_configs") or {}).items()
        }
        return {
            name: LearnerRegistry.create(name, config=learner_configs.get(name))
            for name in self._library
        }

    def fit(
        self,
        Y: Any,
        X: Any,
        new_x: Any = None,
        family: Any = Family.GAUSSIAN,
        obs_weights: Any = None,
        id: Any = None,
    ) -> SuperLearnerResult:
        """
        Fit the library with V-fold cross-validation and compute weights.

        Raises:
            ValueError: On input length mismatches or invalid fold settings
        """
        family = Family.resolve(family)
        y = as_vector(Y)
        n_samples = n_rows(X)
        if len(y) != n_samples:
            raise ValueError(
                f"Y length ({len(y)}) != number of rows in X ({n_samples})"
            )

        weights = None if obs_weights is None else as_vector(obs_weights).astype(float)
        if weights is not None and len(weights) != n_samples:
            raise ValueError(
                f"obs_weights length ({len(weights)}) "
                f"!= number of rows in X ({n_samples})"
            )
        ids = None if id is None else as_vector(id)

        y_numeric = binary_indicator(y) if family is Family.BINOMIAL else y.astype(float)
        risk_weights = np.ones(n_samples) if weights is None else weights

        folds = make_folds(
            n_samples,
            int(self._config["cv_folds"]),
            id=ids,
            shuffle=bool(self._config["shuffle"]),
            random_state=self._config["random_state"],
        )
        learners = self._create_learners()

        logger.info(
            f"Fitting super learner ({family}): library={self._library}, "
            f"folds={len(folds)}, n_samples={n_samples}"
        )
        start_time = time.time()

        Z = np.full((n_samples, len(learners)), np.nan)
        for fold_idx, (train_idx, valid_idx) in enumerate(folds):
            for col, (name, learner) in enumerate(learners.items()):
                output = learner.fit(
                    y[train_idx],
                    take_rows(X, train_idx),
                    new_x=take_rows(X, valid_idx),
                    family=family,
                    obs_weights=None if weights is None else weights[train_idx],
                    id=None if ids is None else ids[train_idx],
                )
                Z[valid_idx, col] = output.pred
            logger.debug(f"Fold {fold_idx + 1}/{len(folds)} complete")

        cv_risk = np.average((Z - y_numeric[:, None]) ** 2, axis=0, weights=risk_weights)
        coef = self._compute_coef(Z, y_numeric, risk_weights)

        fits: Dict[str, LearnerFit] = {}
        columns = []
        for name, learner in learners.items():
            output = learner.fit(
                y, X,
                new_x=new_x,
                family=family,
                obs_weights=weights,
                id=ids,
            )
            fits[name] = output.fit
            columns.append(output.pred)
        library_predict = np.column_stack(columns)

        risk_str = ", ".join(
            f"{name}={risk:.4f} (w={weight:.3f})"
            for name, risk, weight in zip(self._library, cv_risk, coef)
        )
        logger.info(
            f"Super learner complete: {risk_str}, "
            f"time={time.time() - start_time:.1f}s"
        )

        return SuperLearnerResult(
            pred=library_predict @ coef,
            library_predict=library_predict,
            coef=coef,
            cv_risk=cv_risk,
            Z=Z,
            fits=fits,
            learners=learners,
            family=family,
            library=list(self._library),
            folds=folds,
        )

    def _compute_coef(
        self,
        Z: np.ndarray,
        y: np.ndarray,
        weights: np.ndarray,
    ) -> np.ndarray:
        """Weighted NNLS weights normalized to sum to one."""
        root_w = np.sqrt(weights)
        coef, _ = nnls(Z * root_w[:, None], y * root_w)

        total = coef.sum()
        if total <= 0:
            logger.warning(
                "All learners received zero weight; falling back to equal weights"
            )
            return np.full(Z.shape[1], 1.0 / Z.shape[1])
        return coef / total


__all__ = [
    "SuperLearner",
    "SuperLearnerResult",
    "make_folds",
    "take_rows",
]
