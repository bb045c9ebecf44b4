"""Rule registry for automatic discovery and registration."""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from structdoc.rules.base import Rule

logger = logging.getLogger(__name__)

RULE_MODULES = ("structured_function_doc",)


class RuleRegistry:
    """Singleton registry for rule auto-discovery and lookup."""

    _instance: "RuleRegistry | None" = None

    def __new__(cls) -> "RuleRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._rules = {}
            cls._instance._initialized = False
        return cls._instance

    def _discover_rules(self) -> None:
        """Import the built-in rule modules so they register themselves."""
        if self._initialized:
            return

        for module in RULE_MODULES:
            importlib.import_module(f"structdoc.rules.{module}")

        self._initialized = True

    def register(self, rule_cls: type["Rule"]) -> None:
        """Register a rule class."""
        identifier = rule_cls.description.identifier
        if identifier in self._rules and self._rules[identifier] is not rule_cls:
            logger.warning("Replacing registered rule '%s'", identifier)
        self._rules[identifier] = rule_cls

    def get(self, identifier: str) -> type["Rule"]:
        """Get a rule class by identifier."""
        self._discover_rules()
        if identifier not in self._rules:
            available = ", ".join(sorted(self._rules.keys()))
            raise ValueError(f"Unknown rule: {identifier}. Available: {available}")
        return self._rules[identifier]

    def list_all(self) -> dict[str, type["Rule"]]:
        """List all registered rules."""
        self._discover_rules()
        return self._rules.copy()

    def __iter__(self) -> Iterator[tuple[str, type["Rule"]]]:
        self._discover_rules()
        return iter(self._rules.items())

    def __contains__(self, identifier: str) -> bool:
        self._discover_rules()
        return identifier in self._rules

    def __len__(self) -> int:
        self._discover_rules()
        return len(self._rules)


# Singleton instance
registry = RuleRegistry()


def register_rule(cls: type["Rule"]) -> type["Rule"]:
    """Decorator to register a rule class."""
    registry.register(cls)
    return cls
