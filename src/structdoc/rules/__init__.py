"""Lint rules for structured documentation comments."""

from structdoc.rules.base import (
    Example,
    Location,
    Rule,
    RuleDescription,
    RuleKind,
    StyleViolation,
)
from structdoc.rules.registry import RuleRegistry, register_rule, registry
from structdoc.rules.structured_function_doc import StructuredFunctionDocRule

__all__ = [
    "Example",
    "Location",
    "Rule",
    "RuleDescription",
    "RuleKind",
    "StyleViolation",
    "RuleRegistry",
    "register_rule",
    "registry",
    "StructuredFunctionDocRule",
]
