"""
Response families for base learners.

A family tells a learner which kind of outcome it is modelling and, by
extension, which prediction extraction path to use:

- gaussian: regression, predictions are conditional means
- binomial: binary classification, predictions are positive-class probabilities
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

import numpy as np


class Family(str, Enum):
    """Outcome family accepted by every learner."""

    GAUSSIAN = "gaussian"
    BINOMIAL = "binomial"

    @classmethod
    def resolve(cls, value: Any) -> "Family":
        """
        Resolve a family descriptor into a Family.

        Accepts a Family, a case-insensitive name, a mapping with a
        ``"family"`` key, or any object exposing a ``family`` attribute.

        Raises:
            ValueError: If the descriptor does not name a known family
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, Mapping):
            value = value.get("family")
        elif not isinstance(value, str) and hasattr(value, "family"):
            value = value.family

        if isinstance(value, cls):
            return value

        if isinstance(value, str):
            name = value.lower().strip()
            for member in cls:
                if member.value == name:
                    return member

        available = [member.value for member in cls]
        raise ValueError(
            f"Unknown family {value!r}. Available families: {available}"
        )

    @property
    def is_classification(self) -> bool:
        return self is Family.BINOMIAL

    def __str__(self) -> str:
        return self.value


def _is_positive_label(label: Any) -> bool:
    if isinstance(label, str):
        return label.strip() == "1"
    try:
        return bool(label == 1)
    except (TypeError, ValueError):
        return False


def positive_class_index(classes: Sequence[Any]) -> int:
    """
    Locate the positive class among sorted binomial class labels.

    The positive class is the label 1 (or "1"/True). With exactly two
    classes and no such label, the second sorted class is used.

    Raises:
        ValueError: If no positive class can be identified
    """
    for index, label in enumerate(classes):
        if _is_positive_label(label):
            return index
    if len(classes) == 2:
        return 1
    raise ValueError(
        f"Cannot identify the positive class among {list(classes)}"
    )


def binary_indicator(y: np.ndarray) -> np.ndarray:
    """
    Recode a binomial outcome as 1.0 for the positive class and 0.0 otherwise.

    A single observed level is all ones when it is the positive label and all
    zeros otherwise, as happens in a fold of a rare outcome.
    """
    classes = np.unique(y)
    if len(classes) == 1:
        return np.full(len(y), 1.0 if _is_positive_label(classes[0]) else 0.0)
    positive = classes[positive_class_index(classes)]
    return (y == positive).astype(float)


__all__ = ["Family", "positive_class_index", "binary_indicator"]
