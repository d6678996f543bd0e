"""
Factory Module - Name-keyed registries for strategies and variants.

Strategies register themselves with @register_strategy and are built by
name with create_strategy(). The variant layer keeps its own Registry of
board classes on the same terms.
"""

import logging
import re
from typing import Dict, Generic, List, Optional, Sequence, Type, TypeVar

from .base import ExpansionStrategy
from .context import RunConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Names double as CLI choices and settings values
NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")


class Registry(Generic[T]):
    """
    Classes looked up by their `name` class attribute.

    A class must define its own name (an inherited one does not count),
    the name must be a lowercase identifier, and each name maps to one
    class only.

    Attributes:
        kind: What the registry holds, used in error messages
        required: Class attributes every registered class must provide
    """

    def __init__(self, kind: str, required: Sequence[str] = ()):
        self.kind = kind
        self.required = tuple(required)
        self._entries: Dict[str, Type[T]] = {}

    def register(self, cls: Type[T]) -> Type[T]:
        """
        Add a class under its name.

        Args:
            cls: Class to register

        Returns:
            The same class (for decorator use)

        Raises:
            ValueError: If the name is missing, malformed or already taken,
                or a required attribute is missing
        """
        name = cls.__dict__.get("name")
        if not isinstance(name, str) or not NAME_PATTERN.match(name):
            raise ValueError(f"{self.kind.capitalize()} {cls.__name__} has invalid name: {name!r}")

        missing = [attr for attr in self.required if not hasattr(cls, attr)]
        if missing:
            raise ValueError(f"{self.kind.capitalize()} {name} is missing: {', '.join(missing)}")

        existing = self._entries.get(name)
        if existing is not None and existing is not cls:
            raise ValueError(
                f"Duplicate {self.kind} name: {name} (already used by {existing.__name__})"
            )

        self._entries[name] = cls
        logger.debug(f"Registered {self.kind} {name} ({cls.__name__})")
        return cls

    def get(self, name: str) -> Type[T]:
        """
        Raises:
            ValueError: If nothing is registered under `name`
        """
        if name not in self._entries:
            available = ", ".join(self._entries.keys())
            raise ValueError(f"Unknown {self.kind}: {name}. Available: {available}")
        return self._entries[name]

    def names(self) -> List[str]:
        return list(self._entries.keys())

    def info(self) -> List[Dict[str, str]]:
        """Name and description of every registered class."""
        return [
            {"name": name, "description": getattr(cls, "description", "")}
            for name, cls in self._entries.items()
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._entries


_STRATEGIES: Registry[ExpansionStrategy] = Registry("strategy", required=("description",))


def register_strategy(cls: Type[ExpansionStrategy]) -> Type[ExpansionStrategy]:
    """
    Decorator to register a strategy class.

    Usage:
        @register_strategy
        class MyStrategy(ExpansionStrategy):
            name = "my_strategy"
            ...
    """
    if not issubclass(cls, ExpansionStrategy):
        raise TypeError(f"{cls.__name__} is not an ExpansionStrategy")
    return _STRATEGIES.register(cls)


def create_strategy(name: str, config: Optional[RunConfig] = None) -> ExpansionStrategy:
    """
    Create a strategy instance by name.

    Args:
        name: Strategy name ("dfs" or "hsd")
        config: Run configuration shared with the engine

    Returns:
        Fresh strategy instance with zeroed counters

    Raises:
        ValueError: If strategy name not found
    """
    return _STRATEGIES.get(name)(config=config)


def get_strategy_names() -> List[str]:
    return _STRATEGIES.names()


def get_strategy_info() -> List[Dict[str, str]]:
    """
    Get name and description for all registered strategies.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    return _STRATEGIES.info()
