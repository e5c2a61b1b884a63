"""
BaseLearner abstract interface for the learner library.

Every base learner handed to the super learner implements the same
calling convention:

    output = learner.fit(Y, X, new_x, family, obs_weights, id, **params)
    pred = learner.predict(output.fit, newdata)

This module provides:
- LearnerFit: Immutable record returned by fit and passed back to predict
- LearnerOutput: The (pred, fit) pair returned by fit
- BaseLearner: Abstract base class for all learners
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd

from .family import Family


# =============================================================================
# LEARNER FIT
# =============================================================================

@dataclass(frozen=True)
class LearnerFit:
    """
    Fitted-model handle produced by a learner.

    The record is passed verbatim into ``BaseLearner.predict`` later on. The
    family tag stored here decides how predictions are extracted, so it must
    match the family used at prediction time.

    Attributes:
        object: The fitted estimator (opaque to callers)
        family: Family the learner was fitted under
        learner: Registered name of the learner that produced the fit
        params: Parameters the estimator was built with, including
            parameters the estimator does not use

    Example:
        >>> output = learner.fit(y, X, family="gaussian")
        >>> output.fit.family
        <Family.GAUSSIAN: 'gaussian'>
    """
    object: Any
    family: Family
    learner: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class LearnerOutput:
    """
    Output of ``BaseLearner.fit``.

    Attributes:
        pred: Predictions for the prediction targets, shape (m,)
        fit: Fitted-model handle for later predictions
    """
    pred: np.ndarray
    fit: LearnerFit

    @property
    def n_samples(self) -> int:
        """Number of predicted rows."""
        return len(self.pred)


# =============================================================================
# HELPERS
# =============================================================================

def n_rows(X: Any) -> int:
    """Row count of a covariate table (DataFrame, array or nested list)."""
    if hasattr(X, "shape"):
        return int(X.shape[0])
    return len(X)


def n_columns(X: Any) -> int:
    """Column count of a covariate table."""
    if hasattr(X, "shape"):
        if len(X.shape) < 2:
            raise ValueError(
                f"Covariates must be 2D (n_samples, n_features), got shape {X.shape}"
            )
        return int(X.shape[1])
    return np.asarray(X).shape[1]


def as_vector(values: Any) -> np.ndarray:
    """Flatten an outcome or weight container into a 1D array."""
    if isinstance(values, (pd.Series, pd.Index)):
        return values.to_numpy()
    if isinstance(values, pd.DataFrame):
        if values.shape[1] != 1:
            raise ValueError(
                f"Expected a single column, got {values.shape[1]} columns"
            )
        return values.iloc[:, 0].to_numpy()
    return np.ravel(np.asarray(values))


# =============================================================================
# BASE LEARNER INTERFACE
# =============================================================================

class BaseLearner(ABC):
    """
    Abstract base class for all base learners.

    Learners are configuration holders: ``fit`` returns a new LearnerFit
    every call and never mutates the learner, so one instance can be reused
    across cross-validation folds.

    Subclasses must implement:
        - name (property): Registered learner name
        - get_default_config(): Default hyperparameters
        - fit(): Training logic, returns LearnerOutput
        - predict(): Prediction from a LearnerFit

    Example:
        >>> @register("my_learner", category="classical")
        ... class MyLearner(BaseLearner):
        ...     name = "my_learner"
        ...
        ...     def fit(self, Y, X, new_x=None, family="gaussian", ...):
        ...         return LearnerOutput(pred=..., fit=LearnerFit(...))
        ...
        ...     def predict(self, fit, newdata, family=None):
        ...         return fit.object.predict(newdata)
    """

    name: str = ""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the learner.

        Args:
            config: Hyperparameter overrides. If None, uses defaults
                   from get_default_config().
        """
        self._config = self._merge_config(config)

    def _merge_config(self, config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Merge provided config with defaults."""
        defaults = self.get_default_config()
        if config is None:
            return defaults
        merged = defaults.copy()
        merged.update(config)
        return merged

    @property
    def config(self) -> Dict[str, Any]:
        """Current learner configuration."""
        return self._config

    # =========================================================================
    # ABSTRACT METHODS (must implement)
    # =========================================================================

    @abstractmethod
    def get_default_config(self) -> Dict[str, Any]:
        """
        Return default hyperparameters for this learner.

        Values of None mean the default depends on the family or the
        covariates and is resolved at fit time.
        """
        pass

    @abstractmethod
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
        Fit the learner and predict the prediction targets.

        Args:
            Y: Outcome vector, shape (n_samples,)
            X: Covariate table, shape (n_samples, n_features)
            new_x: Prediction targets; defaults to X
            family: Family descriptor (see Family.resolve)
            obs_weights: Optional observation weights, shape (n_samples,)
            id: Optional grouping ids, shape (n_samples,)
            **params: Hyperparameter overrides for this call

        Returns:
            LearnerOutput with predictions for new_x and the fit handle

        Raises:
            ValueError: If input lengths disagree
        """
        pass

    @abstractmethod
    def predict(
        self,
        fit: LearnerFit,
        newdata: Any,
        family: Any = None,
    ) -> np.ndarray:
        """
        Predict from a fit produced by this learner.

        Args:
            fit: LearnerFit returned by fit()
            newdata: Covariate table, shape (m, n_features)
            family: Optional family; must match the fitted family

        Returns:
            Predictions, shape (m,)

        Raises:
            ValueError: If the fit belongs to another learner or family
        """
        pass

    # =========================================================================
    # VALIDATION HELPERS
    # =========================================================================

    def _validate_inputs(
        self,
        y: np.ndarray,
        X: Any,
        obs_weights: Optional[np.ndarray] = None,
    ) -> None:
        """
        Check that outcome, covariates and weights describe the same rows.

        Raises:
            ValueError: On any length mismatch or empty input
        """
        rows = n_rows(X)
        if rows == 0:
            raise ValueError("X must contain at least one row")
        if len(y) != rows:
            raise ValueError(
                f"Y length ({len(y)}) != number of rows in X ({rows})"
            )
        if obs_weights is not None and len(obs_weights) != rows:
            raise ValueError(
                f"obs_weights length ({len(obs_weights)}) "
                f"!= number of rows in X ({rows})"
            )

    def _validate_fit(self, fit: LearnerFit, family: Any = None) -> Family:
        """
        Check a fit handle before predicting from it.

        Returns:
            The family stored on the fit

        Raises:
            TypeError: If fit is not a LearnerFit
            ValueError: If the fit belongs to another learner or family
        """
        if not isinstance(fit, LearnerFit):
            raise TypeError(
                f"Expected a LearnerFit, got {type(fit).__name__}"
            )
        if fit.learner != self.name:
            raise ValueError(
                f"Fit was produced by learner '{fit.learner}', "
                f"cannot predict with '{self.name}'"
            )
        if family is not None:
            requested = Family.resolve(family)
            if requested is not fit.family:
                raise ValueError(
                    f"Family mismatch: fitted as '{fit.family}', "
                    f"predict requested '{requested}'"
                )
        return fit.family

    def __repr__(self) -> str:
        """Return string representation."""
        return f"{self.__class__.__name__}(name={self.name})"


__all__ = [
    "LearnerFit",
    "LearnerOutput",
    "BaseLearner",
    "n_rows",
    "n_columns",
    "as_vector",
]
