"""Swift source model: function declarations and their doc comments.

This is a lightweight scanner, not a Swift parser. It finds ``func`` and
``init`` declarations outside of comments and string literals, reads their
parameter names in declaration order and locates the doc comment (``///``
lines or a ``/** ... */`` block) directly above each declaration.

Example:
    from structdoc.swift import SwiftFile

    source = SwiftFile.from_path("Sources/Greeter.swift")
    for decl in source.declarations:
        print(decl.name, decl.parameter_names, decl.doc_range)
"""

from __future__ import annotations

import bisect
import logging
import re
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from pathlib import Path

from structdoc.source import BLOCK_DOC_CLOSE, BLOCK_DOC_OPEN, LineTable, is_line_doc
from structdoc.types import ByteRange

logger = logging.getLogger(__name__)

_DECLARATION_RE = re.compile(
    r"(?<![.\w])(?:func\s+(?P<name>`[^`]+`|[A-Za-z_][\w]*)|(?P<init>init)[?!]?)"
    r"\s*(?:<[^(){}]*>)?\s*\("
)


class SourceReadError(Exception):
    """Raised when a source file cannot be read or decoded."""

    def __init__(self, path: Path, error: str):
        self.path = path
        self.error = error
        super().__init__(f"Cannot read {path}: {error}")


class DeclarationKind(str, Enum):
    """Kinds of declarations whose doc comments are checked."""

    FUNCTION = "function"
    INITIALIZER = "initializer"


@dataclass(frozen=True)
class FunctionDeclaration:
    """A function or initializer declaration.

    Attributes:
        name: Declared name (``init`` for initializers)
        kind: Declaration kind
        offset: Byte offset of the ``func``/``init`` keyword
        parameter_names: Internal parameter names in declaration order
        doc_range: Byte range of the attached doc comment, if any
    """

    name: str
    kind: DeclarationKind
    offset: int
    parameter_names: tuple[str, ...] = ()
    doc_range: ByteRange | None = None

    @property
    def is_documented(self) -> bool:
        return self.doc_range is not None


def mask_comments_and_strings(text: str) -> str:
    """Blank out comments and string literals, keeping length and newlines."""
    out = list(text)
    i, n = 0, len(text)

    def blank(start: int, stop: int) -> None:
        for k in range(start, min(stop, n)):
            if out[k] not in "\r\n":
                out[k] = " "

    while i < n:
        if text.startswith("//", i):
            stop = text.find("\n", i)
            stop = n if stop == -1 else stop
            blank(i, stop)
            i = stop
        elif text.startswith("/*", i):
            # Swift block comments nest.
            depth, j = 1, i + 2
            while j < n and depth:
                if text.startswith("/*", j):
                    depth, j = depth + 1, j + 2
                elif text.startswith("*/", j):
                    depth, j = depth - 1, j + 2
                else:
                    j += 1
            blank(i, j)
            i = j
        elif text.startswith('"""', i):
            stop = text.find('"""', i + 3)
            stop = n if stop == -1 else stop + 3
            blank(i, stop)
            i = stop
        elif text[i] == '"':
            j = i + 1
            while j < n and text[j] not in '"\n':
                j += 2 if text[j] == "\\" else 1
            blank(i, j + 1)
            i = j + 1
        else:
            i += 1

    return "".join(out)


def _closing_paren(text: str, open_index: int) -> int:
    depth = 0
    for index in range(open_index, len(text)):
        char = text[index]
        if char in "([":
            depth += 1
        elif char in ")]":
            depth -= 1
            if depth == 0:
                return index
    return -1


def _split_top_level(clause: str) -> list[str]:
    """Split a parameter clause at commas outside brackets and generics.

    Angle brackets only count in the type part of a parameter; after a
    top-level ``=`` they are comparison operators of the default value.
    """
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    previous = ""
    in_default = False
    for char in clause:
        if char in "([":
            depth += 1
        elif char in ")]":
            depth -= 1
        elif char == "<" and not in_default:
            depth += 1
        elif char == ">" and not in_default and previous != "-" and depth > 0:
            depth -= 1
        elif char == "=" and depth == 0:
            in_default = True
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            in_default = False
        else:
            current.append(char)
        previous = char
    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


def parameter_names_from_clause(clause: str) -> tuple[str, ...]:
    """Extract internal parameter names from a parameter clause.

    ``(_ text: String, in range: Range<Int>, limit: Int = 10)`` yields
    ``("text", "range", "limit")``.
    """
    names = []
    for part in _split_top_level(clause):
        head = part.split(":", 1)[0].split()
        if not head:
            continue
        names.append(head[-1].strip("`"))
    return tuple(names)


@dataclass
class SwiftFile:
    """A Swift source file with its line table and declarations."""

    contents: str
    path: Path | None = None

    @classmethod
    def from_path(cls, path: str | Path) -> "SwiftFile":
        """Read a Swift file from disk.

        Raises:
            SourceReadError: If the file cannot be read as UTF-8
        """
        path = Path(path)
        try:
            contents = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(path, str(e)) from e
        return cls(contents=contents, path=path)

    @cached_property
    def lines(self) -> LineTable:
        return LineTable.from_text(self.contents)

    @cached_property
    def declarations(self) -> list[FunctionDeclaration]:
        """Function and initializer declarations in source order."""
        masked = self._masked
        result = []

        for match in _DECLARATION_RE.finditer(masked):
            open_index = match.end() - 1
            close_index = _closing_paren(masked, open_index)
            if close_index == -1:
                logger.debug("Unbalanced parameter clause at character %d", open_index)
                continue

            line_index, column = self._line_and_column(match.start())
            if match.group("init"):
                name, kind = "init", DeclarationKind.INITIALIZER
            else:
                name, kind = match.group("name").strip("`"), DeclarationKind.FUNCTION

            result.append(
                FunctionDeclaration(
                    name=name,
                    kind=kind,
                    offset=self.lines.byte_offset(line_index, column),
                    parameter_names=parameter_names_from_clause(
                        masked[open_index + 1 : close_index]
                    ),
                    doc_range=self._doc_range_above(line_index),
                )
            )

        return result

    @cached_property
    def _line_starts(self) -> list[int]:
        starts, position = [], 0
        for line in self.lines:
            starts.append(position)
            # Terminators are ASCII, so byte and character widths agree.
            position += len(line.content) + line.length - line.content_length
        return starts

    def _line_and_column(self, char_index: int) -> tuple[int, int]:
        line_index = bisect.bisect_right(self._line_starts, char_index) - 1
        return line_index, char_index - self._line_starts[line_index]

    @cached_property
    def _masked(self) -> str:
        return mask_comments_and_strings(self.contents)

    def _masked_line(self, line_index: int) -> str:
        start = self._line_starts[line_index]
        return self._masked[start : start + len(self.lines[line_index].content)]

    def _attribute_start(self, line_index: int) -> int | None:
        """Index of the ``@`` line of an attribute ending on ``line_index``, if any.

        Attribute arguments may continue over several lines, e.g.
        ``@available(*, deprecated,\\n    message: "Use g()")``.
        """
        balance = 0
        for index in range(line_index, -1, -1):
            text = self._masked_line(index)
            balance += text.count(")") - text.count("(")
            if balance <= 0:
                return index if text.strip().startswith("@") else None
        return None

    def _doc_range_above(self, line_index: int) -> ByteRange | None:
        """Locate the doc comment directly above a declaration line."""
        index = line_index - 1
        while index >= 0:
            start = self._attribute_start(index)
            if start is None:
                break
            index = start - 1
        if index < 0:
            return None

        last = self.lines[index]
        text = last.content.strip()
        if is_line_doc(text):
            first = index
            while first > 0 and is_line_doc(self.lines[first - 1].content):
                first -= 1
        elif text.endswith(BLOCK_DOC_CLOSE):
            first = index
            while first >= 0 and "/*" not in self.lines[first].content:
                first -= 1
            if first < 0 or not self.lines[first].content.strip().startswith(BLOCK_DOC_OPEN):
                return None
            if self.lines[first].content.strip().startswith("/**/"):
                return None
        else:
            return None

        head = self.lines[first]
        start = head.offset + len(
            head.content[: len(head.content) - len(head.content.lstrip())].encode("utf-8")
        )
        return ByteRange(location=start, length=last.content_end - start)
