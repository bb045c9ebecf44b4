"""Splitting a doc comment into its summary and parameters blocks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from structdoc.source import SourceLine

PARAMETERS_HEADER = "- Parameters:"


class NoBoundaryFoundError(Exception):
    """Raised when a doc comment has neither a blank line nor a parameters header."""

    def __init__(self, line_count: int):
        self.line_count = line_count
        super().__init__(
            f"No blank line or '{PARAMETERS_HEADER}' header in {line_count} line(s)"
        )


class BlockKind(str, Enum):
    """Kinds of structural blocks in a doc comment."""

    SUMMARY = "summary"
    PARAMETER_SECTION = "parameter_section"


@dataclass(frozen=True)
class Block:
    """A contiguous run of doc comment lines with a structural role."""

    kind: BlockKind
    lines: tuple[SourceLine, ...]

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def offset(self) -> int | None:
        return self.lines[0].offset if self.lines else None


@dataclass(frozen=True)
class DocBlocks:
    """Result of splitting a doc comment.

    Attributes:
        summary: Lines before the boundary, None when the boundary is the first line
        parameters: Lines from the boundary on (header inclusive, blank line exclusive)
    """

    summary: Block | None
    parameters: Block


def is_boundary(line: SourceLine) -> bool:
    """Check whether a line ends the summary block."""
    text = line.content.strip()
    return not text or text == PARAMETERS_HEADER


def split_blocks(lines: Sequence[SourceLine]) -> DocBlocks:
    """Split doc comment lines at the first blank line or parameters header.

    Args:
        lines: Sliced doc comment lines

    Returns:
        DocBlocks with the summary and parameters blocks

    Raises:
        NoBoundaryFoundError: If no line qualifies as a boundary
    """
    for index, line in enumerate(lines):
        if not is_boundary(line):
            continue

        start = index + 1 if line.is_blank else index
        summary = Block(BlockKind.SUMMARY, tuple(lines[:index])) if index > 0 else None
        parameters = Block(BlockKind.PARAMETER_SECTION, tuple(lines[start:]))
        return DocBlocks(summary=summary, parameters=parameters)

    raise NoBoundaryFoundError(len(lines))
