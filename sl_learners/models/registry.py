"""
LearnerRegistry - Plugin system for base learners.

The registry lets the super learner and the CLI refer to learners by name:
- Register learners using the @register decorator
- Create learners by name
- List available learners by category
- Get learner metadata

Example:
    >>> @LearnerRegistry.register("extra_trees", category="classical")
    ... class ExtraTreesLearner(BaseLearner):
    ...     pass
    ...
    >>> learner = LearnerRegistry.create("extra_trees", config={"ntree": 100})
    >>> LearnerRegistry.list_learners()
    {'classical': ['extra_trees', 'mean']}
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from .base import BaseLearner

logger = logging.getLogger(__name__)


class LearnerRegistry:
    """
    Plugin registry for base learners.

    Class Attributes:
        _learners: Dict mapping learner names and aliases to learner classes
        _categories: Dict mapping category names to lists of learner names
        _metadata: Dict mapping canonical learner names to metadata dicts
    """

    _learners: dict[str, type[BaseLearner]] = {}
    _categories: dict[str, list[str]] = {}
    _metadata: dict[str, dict[str, Any]] = {}

    @classmethod
    def register(
        cls,
        name: str,
        category: str,
        description: str = "",
        aliases: list[str] | None = None,
    ) -> Callable[[type[BaseLearner]], type[BaseLearner]]:
        """
        Decorator to register a learner class.

        Args:
            name: Unique learner identifier (e.g., "extra_trees", "mean")
            category: Learner category (e.g., "classical", "ensemble")
            description: Human-readable description
            aliases: Alternative names for the learner

        Returns:
            Decorator function that registers the learner class

        Raises:
            TypeError: If the class is not a BaseLearner subclass
            ValueError: If learner name is already registered
        """
        aliases = aliases or []
        key = name.lower().strip()

        def decorator(learner_class: type[BaseLearner]) -> type[BaseLearner]:
            if not issubclass(learner_class, BaseLearner):
                raise TypeError(
                    f"Learner class must be a subclass of BaseLearner, "
                    f"got {learner_class.__name__}"
                )

            if key in cls._learners:
                raise ValueError(
                    f"Learner '{name}' is already registered to "
                    f"{cls._learners[key].__name__}"
                )

            cls._learners[key] = learner_class

            for alias in aliases:
                alias_key = alias.lower().strip()
                if alias_key in cls._learners:
                    logger.warning(
                        f"Alias '{alias}' already registered, skipping"
                    )
                else:
                    cls._learners[alias_key] = learner_class

            cls._categories.setdefault(category, []).append(key)

            cls._metadata[key] = {
                "name": key,
                "category": category,
                "description": description,
                "aliases": aliases,
                "class": learner_class.__name__,
            }

            logger.debug(
                f"Registered learner '{key}' ({learner_class.__name__}) "
                f"in category '{category}'"
            )

            return learner_class

        return decorator

    @classmethod
    def _lookup(cls, name: str) -> type[BaseLearner]:
        name_lower = name.lower().strip()

        if name_lower not in cls._learners:
            available = sorted(cls._learners.keys())
            raise ValueError(
                f"Unknown learner '{name}'. Available learners: {available}"
            )

        return cls._learners[name_lower]

    @classmethod
    def create(
        cls,
        name: str,
        config: dict[str, Any] | None = None,
    ) -> BaseLearner:
        """
        Instantiate a registered learner.

        Raises:
            ValueError: If learner name is not registered
        """
        learner_class = cls._lookup(name)
        return learner_class(config=config)

    @classmethod
    def get(cls, name: str) -> type[BaseLearner]:
        """Get a learner class by name or alias."""
        return cls._lookup(name)

    @classmethod
    def list_learners(cls) -> dict[str, list[str]]:
        """List all registered learners by category."""
        return {category: list(names) for category, names in cls._categories.items()}

    @classmethod
    def list_all(cls) -> list[str]:
        """Sorted list of canonical learner names (aliases excluded)."""
        return sorted(cls._metadata.keys())

    @classmethod
    def list_category(cls, category: str) -> list[str]:
        """
        List all learners in a specific category.

        Raises:
            ValueError: If category is not found
        """
        category_lower = category.lower().strip()

        if category_lower not in cls._categories:
            available = sorted(cls._categories.keys())
            raise ValueError(
                f"Unknown category '{category}'. Available categories: {available}"
            )

        return list(cls._categories[category_lower])

    @classmethod
    def get_metadata(cls, name: str) -> dict[str, Any]:
        """
        Get metadata for a registered learner.

        Aliases resolve to the metadata of their canonical learner.

        Raises:
            ValueError: If learner name is not registered
        """
        learner_class = cls._lookup(name)
        for meta in cls._metadata.values():
            if meta["class"] == learner_class.__name__:
                return meta.copy()

        return {
            "name": name.lower().strip(),
            "category": "unknown",
            "description": "",
            "aliases": [],
            "class": learner_class.__name__,
        }

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if a learner name or alias is registered."""
        return name.lower().strip() in cls._learners

    @classmethod
    def clear(cls) -> None:
        """
        Clear all registered learners.

        Primarily used for testing.
        """
        cls._learners.clear()
        cls._categories.clear()
        cls._metadata.clear()
        logger.debug("Cleared all registered learners")

    @classmethod
    def categories(cls) -> list[str]:
        """Sorted list of category names."""
        return sorted(cls._categories.keys())

    @classmethod
    def count(cls) -> int:
        """Number of registered learners (excluding aliases)."""
        return len(cls._metadata)


def register(
    name: str,
    category: str,
    description: str = "",
    aliases: list[str] | None = None,
) -> Callable[[type[BaseLearner]], type[BaseLearner]]:
    """
    Convenience decorator for learner registration.

    Equivalent to LearnerRegistry.register().

    Example:
        >>> from sl_learners.models import register
        >>> @register("my_learner", category="classical")
        ... class MyLearner(BaseLearner):
        ...     pass
    """
    return LearnerRegistry.register(
        name=name,
        category=category,
        description=description,
        aliases=aliases,
    )


__all__ = ["LearnerRegistry", "register"]
