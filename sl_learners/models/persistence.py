"""Save and load fitted learners with joblib."""
from __future__ import annotations

import logging
from pathlib import Path

import joblib

from .base import LearnerFit

logger = logging.getLogger(__name__)


def save_fit(fit: LearnerFit, path: str | Path) -> Path:
    """Write a LearnerFit to disk, creating parent directories."""
    if not isinstance(fit, LearnerFit):
        raise TypeError(f"Expected a LearnerFit, got {type(fit).__name__}")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(fit, path)

    logger.info(f"Saved {fit.learner} fit ({fit.family}) to {path}")
    return path


def load_fit(path: str | Path) -> LearnerFit:
    """
    Load a LearnerFit written by save_fit.

    Raises:
        FileNotFoundError: If path doesn't exist
        TypeError: If the file does not contain a LearnerFit
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Fit file not found: {path}")

    fit = joblib.load(path)
    if not isinstance(fit, LearnerFit):
        raise TypeError(
            f"{path} does not contain a LearnerFit (got {type(fit).__name__})"
        )

    logger.info(f"Loaded {fit.learner} fit ({fit.family}) from {path}")
    return fit


__all__ = ["save_fit", "load_fit"]
