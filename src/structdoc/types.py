"""Type definitions for structdoc."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    """Severity levels for style violations."""

    WARNING = "warning"
    ERROR = "error"

    def __ge__(self, other: "Severity") -> bool:
        order = [Severity.WARNING, Severity.ERROR]
        return order.index(self) >= order.index(other)

    def __gt__(self, other: "Severity") -> bool:
        order = [Severity.WARNING, Severity.ERROR]
        return order.index(self) > order.index(other)

    def __le__(self, other: "Severity") -> bool:
        order = [Severity.WARNING, Severity.ERROR]
        return order.index(self) <= order.index(other)

    def __lt__(self, other: "Severity") -> bool:
        order = [Severity.WARNING, Severity.ERROR]
        return order.index(self) < order.index(other)


@dataclass(frozen=True)
class ByteRange:
    """A half-open byte range ``[location, location + length)`` in a file."""

    location: int
    length: int

    @property
    def end(self) -> int:
        return self.location + self.length


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating one doc comment.

    Either valid, or invalid with the byte offset of the earliest line where
    the defect can be localized and a short human readable reason.
    """

    is_valid: bool
    byte_offset: int | None = None
    reason: str | None = None

    @classmethod
    def valid(cls) -> "ValidationOutcome":
        return cls(is_valid=True)

    @classmethod
    def invalid(cls, byte_offset: int, reason: str | None = None) -> "ValidationOutcome":
        return cls(is_valid=False, byte_offset=byte_offset, reason=reason)
