"""Parameter list parsing for structured doc comments.

Two surface syntaxes are accepted for the parameters section, tried in this
order:

Nested form::

    - Parameters:
      - source: The text to scan.
      - limit: Maximum number of matches.

Flat form::

    - Parameter source: The text to scan.
    - Parameter limit: Maximum number of matches.

The flat form also accepts bare ``- source:`` bullets. Entries keep the order
in which they appear; the matcher compares them against the declaration.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from structdoc.blocks import PARAMETERS_HEADER, Block
from structdoc.source import SourceLine

BULLET_MARKERS = ("-", "*", "+")
PARAMETER_KEYWORD = "Parameter"

# Swift markup callouts that may follow the parameter list.
CALLOUTS = frozenset({
    "Attention", "Author", "Authors", "Bug", "Complexity", "Copyright",
    "Date", "Experiment", "Important", "Invariant", "Note", "Postcondition",
    "Precondition", "Remark", "Remarks", "Requires", "Returns", "SeeAlso",
    "Since", "Throws", "ToDo", "Version", "Warning",
})


class ParameterListError(Exception):
    """Raised when the parameters section matches neither accepted form."""

    def __init__(self, reason: str, line: SourceLine | None = None):
        self.reason = reason
        self.line = line
        message = reason if line is None else f"{reason}: {line.content.strip()!r}"
        super().__init__(message)


class ParameterForm(str, Enum):
    """Surface syntax of a parameters section."""

    NESTED = "nested"
    FLAT = "flat"


@dataclass(frozen=True)
class ParameterEntry:
    """One documented parameter.

    Attributes:
        name: Token before the first colon
        text: Entry text starting at the name, e.g. ``"limit: Maximum ..."``
        line: Doc comment line the entry was found on
    """

    name: str
    text: str
    line: SourceLine

    @property
    def offset(self) -> int:
        return self.line.offset

    def documents(self, parameter_name: str) -> bool:
        """Check whether this entry documents the given parameter."""
        return self.text.startswith(f"{parameter_name}:")


@dataclass(frozen=True)
class ParameterList:
    """Parsed parameters section."""

    form: ParameterForm
    entries: tuple[ParameterEntry, ...]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]


def bullet_text(content: str) -> str | None:
    """Get the text after a list bullet, or None for non-bullet lines."""
    text = content.lstrip()
    if text[:1] in BULLET_MARKERS and text[1:2] in (" ", "\t"):
        return text[2:].lstrip()
    return None


def _list_lines(lines: Sequence[SourceLine]) -> list[SourceLine]:
    """Lines of the list block: leading blanks skipped, cut at the next blank."""
    result: list[SourceLine] = []
    for line in lines:
        if line.is_blank:
            if result:
                break
            continue
        result.append(line)
    return result


def _make_entry(line: SourceLine, text: str, allow_keyword: bool) -> ParameterEntry:
    if allow_keyword and text.startswith(PARAMETER_KEYWORD + " "):
        text = text[len(PARAMETER_KEYWORD) :].lstrip()
    if ":" not in text:
        raise ParameterListError("Parameter entry without a colon", line)
    name = text.split(":", 1)[0].strip()
    if not name:
        raise ParameterListError("Parameter entry without a name", line)
    return ParameterEntry(name=name, text=text, line=line)


def _is_callout(text: str) -> bool:
    head, colon, _ = text.partition(":")
    return bool(colon) and head.strip() in CALLOUTS


def _parse_nested(lines: list[SourceLine]) -> tuple[ParameterEntry, ...]:
    header_indent = lines[0].indent
    item_indent: int | None = None
    entries: list[ParameterEntry] = []

    for line in lines[1:]:
        if line.indent <= header_indent:
            break
        if item_indent is None:
            item_indent = line.indent
        if line.indent < item_indent:
            raise ParameterListError("Inconsistent indentation in nested list", line)
        if line.indent > item_indent:
            continue

        text = bullet_text(line.content)
        if text is None:
            raise ParameterListError("Expected a list item", line)
        entries.append(_make_entry(line, text, allow_keyword=False))

    return tuple(entries)


def _parse_flat(lines: list[SourceLine]) -> tuple[ParameterEntry, ...]:
    top_indent = lines[0].indent
    entries: list[ParameterEntry] = []

    for line in lines:
        if line.indent < top_indent:
            raise ParameterListError("Inconsistent indentation in parameter list", line)
        if line.indent > top_indent:
            continue

        text = bullet_text(line.content)
        if text is None:
            raise ParameterListError("Expected a list item", line)
        if _is_callout(text):
            break
        entries.append(_make_entry(line, text, allow_keyword=True))

    return tuple(entries)


def parse_parameter_list(block: Block) -> ParameterList:
    """Parse the parameters block into ordered entries.

    Args:
        block: Parameters block produced by the block splitter

    Returns:
        ParameterList with the detected form and its entries (possibly empty)

    Raises:
        ParameterListError: If the block is not a well-formed list
    """
    lines = _list_lines(block.lines)
    if not lines:
        return ParameterList(form=ParameterForm.FLAT, entries=())

    if lines[0].content.strip() == PARAMETERS_HEADER:
        return ParameterList(form=ParameterForm.NESTED, entries=_parse_nested(lines))
    return ParameterList(form=ParameterForm.FLAT, entries=_parse_flat(lines))
