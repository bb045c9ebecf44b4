"""Base classes for lint rules.

Features:
- Rule descriptions with self-verifying triggering/non-triggering examples
- Immutable rule configuration (thread-safe)
- Style violations with file/line/character locations

Examples mark the expected violation positions with ``↓``::

    Example("↓/// Summary without a parameters section.\\nfunc f(a: Int) {}")
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

from structdoc.config import RuleConfiguration
from structdoc.types import Severity

if TYPE_CHECKING:
    from structdoc.source import LineTable
    from structdoc.swift import SwiftFile

VIOLATION_MARKER = "↓"


def _get_logger(name: str) -> logging.Logger:
    """Get a logger for the given rule identifier."""
    return logging.getLogger(f"structdoc.rules.{name}")


class RuleKind(str, Enum):
    """Rule categories."""

    LINT = "lint"


@dataclass(frozen=True)
class Example:
    """A code example for a rule, with ``↓`` marking expected violations."""

    code: str

    @property
    def source(self) -> str:
        """Example code with violation markers removed."""
        return self.code.replace(VIOLATION_MARKER, "")

    @property
    def marker_offsets(self) -> list[int]:
        """Byte offsets of the violation markers in the marker-free code."""
        offsets = []
        position = 0
        for chunk in self.code.split(VIOLATION_MARKER)[:-1]:
            position += len(chunk.encode("utf-8"))
            offsets.append(position)
        return offsets


@dataclass(frozen=True)
class RuleDescription:
    """Static description of a rule."""

    identifier: str
    name: str
    description: str
    kind: RuleKind = RuleKind.LINT
    non_triggering_examples: tuple[Example, ...] = ()
    triggering_examples: tuple[Example, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "identifier": self.identifier,
            "name": self.name,
            "description": self.description,
            "kind": self.kind.value,
        }


@dataclass(frozen=True)
class Location:
    """Position of a violation in a source file."""

    path: str | None
    line: int
    character: int
    byte_offset: int

    @classmethod
    def from_offset(cls, path: str | None, table: "LineTable", byte_offset: int) -> "Location":
        line, character = table.location(byte_offset)
        return cls(path=path, line=line, character=character, byte_offset=byte_offset)

    def __str__(self) -> str:
        return f"{self.path or '<stdin>'}:{self.line}:{self.character}"


@dataclass(frozen=True)
class StyleViolation:
    """A single finding reported by a rule."""

    rule: RuleDescription
    severity: Severity
    location: Location
    reason: str = field(default="")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "rule_id": self.rule.identifier,
            "rule": self.rule.name,
            "severity": self.severity.value,
            "file": self.location.path,
            "line": self.location.line,
            "character": self.location.character,
            "byte_offset": self.location.byte_offset,
            "reason": self.reason,
        }

    def to_xcode(self) -> str:
        """Format as an Xcode-compatible diagnostic line."""
        return (
            f"{self.location}: {self.severity.value}: "
            f"{self.rule.name} Violation: {self.reason} ({self.rule.identifier})"
        )


class Rule(ABC):
    """Abstract base class for all rules.

    Class Attributes:
        description: Static rule description with examples

    Example:
        class MyRule(Rule):
            description = RuleDescription(
                identifier="my_rule",
                name="My Rule",
                description="Explains what is checked.",
            )

            def validate(self, file):
                ...
    """

    description: ClassVar[RuleDescription]

    def __init__(self, configuration: RuleConfiguration | None = None, **kwargs: Any):
        """Initialize the rule.

        Args:
            configuration: Immutable rule configuration
            **kwargs: Configuration values applied on top of ``configuration``
        """
        configuration = configuration or RuleConfiguration()
        self.configuration = configuration.apply(kwargs) if kwargs else configuration
        self.logger = _get_logger(self.identifier)

    @property
    def identifier(self) -> str:
        return self.description.identifier

    @abstractmethod
    def validate(self, file: "SwiftFile") -> list[StyleViolation]:
        """Run the rule on a source file."""
        pass
