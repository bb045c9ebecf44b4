"""Source text model and doc comment line slicing.

A ``LineTable`` indexes the physical lines of a file by UTF-8 byte offset.
``slice_doc_lines`` turns the byte range of one documentation comment into
plain-text ``SourceLine`` objects: the comment markers (``///`` or
``/** ... */``) and the common indentation are stripped, while every line keeps
the byte offset it had in the original file so violations can point back into
the source.

Example:
    from structdoc.source import LineTable, slice_doc_lines
    from structdoc.types import ByteRange

    text = "/// Adds numbers.\\nfunc add() {}\\n"
    table = LineTable.from_text(text)
    lines = slice_doc_lines(ByteRange(0, 17), table)
    print(lines[0].content)  # "Adds numbers."
"""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass
from typing import Iterator

from structdoc.types import ByteRange


class MalformedRangeError(ValueError):
    """Raised when a doc comment byte range does not align with whole lines."""

    def __init__(self, byte_range: ByteRange, reason: str):
        self.byte_range = byte_range
        self.reason = reason
        super().__init__(
            f"Malformed doc range [{byte_range.location}, {byte_range.end}): {reason}"
        )


_LINE_RE = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)?")

LINE_DOC_MARKER = "///"
BLOCK_DOC_OPEN = "/**"
BLOCK_DOC_CLOSE = "*/"


def is_line_doc(text: str) -> bool:
    """Check whether a line is a ``///`` doc comment; ``////`` banners are not."""
    body = text.lstrip()
    return body.startswith(LINE_DOC_MARKER) and not body.startswith(LINE_DOC_MARKER + "/")


@dataclass(frozen=True)
class Line:
    """A physical line of a file.

    Attributes:
        index: Zero-based line index
        content: Line text without its terminator
        offset: Byte offset of the first byte of the line
        content_length: Byte length of the content
        length: Byte length including the line terminator
    """

    index: int
    content: str
    offset: int
    content_length: int
    length: int

    @property
    def content_end(self) -> int:
        return self.offset + self.content_length

    @property
    def end(self) -> int:
        return self.offset + self.length


@dataclass(frozen=True)
class SourceLine:
    """One line of a doc comment, ready for structural parsing.

    Attributes:
        content: Text with comment marker and common indentation removed
        offset: Byte offset of the line's first character in the original file
        length: Byte length from ``offset`` through the line terminator
    """

    content: str
    offset: int
    length: int

    @property
    def is_blank(self) -> bool:
        return not self.content.strip()

    @property
    def indent(self) -> int:
        return len(self.content) - len(self.content.lstrip())


class LineTable:
    """Read-only table of a file's physical lines, addressed by byte offset."""

    def __init__(self, lines: list[Line], size: int):
        self._lines = lines
        self._offsets = [line.offset for line in lines]
        self.size = size

    @classmethod
    def from_text(cls, text: str) -> "LineTable":
        """Build a line table from decoded file contents."""
        lines: list[Line] = []
        offset = 0
        for match in _LINE_RE.finditer(text):
            raw = match.group()
            if not raw:
                break
            content = raw.rstrip("\r\n")
            content_length = len(content.encode("utf-8"))
            length = len(raw.encode("utf-8"))
            lines.append(
                Line(
                    index=len(lines),
                    content=content,
                    offset=offset,
                    content_length=content_length,
                    length=length,
                )
            )
            offset += length
        return cls(lines, offset)

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> Line:
        return self._lines[index]

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    def line_at(self, offset: int) -> Line:
        """Get the line containing the given byte offset."""
        if not self._lines or offset < 0 or offset > self.size:
            raise IndexError(f"Byte offset {offset} outside of file (size {self.size})")
        index = bisect.bisect_right(self._offsets, offset) - 1
        return self._lines[max(index, 0)]

    def byte_offset(self, line_index: int, column: int) -> int:
        """Convert a (line index, character column) pair to a byte offset."""
        line = self._lines[line_index]
        return line.offset + len(line.content[:column].encode("utf-8"))

    def location(self, offset: int) -> tuple[int, int]:
        """Get the 1-based (line, character) location of a byte offset."""
        line = self.line_at(offset)
        raw = line.content.encode("utf-8")[: offset - line.offset]
        return line.index + 1, len(raw.decode("utf-8", errors="ignore")) + 1

    def lines_in_range(self, byte_range: ByteRange) -> tuple[Line, ...]:
        """Get the whole lines covered by a byte range.

        Raises:
            MalformedRangeError: If the range does not start at the first
                non-blank text of a line or does not end at a line end.
        """
        if byte_range.length <= 0:
            raise MalformedRangeError(byte_range, "empty range")
        if byte_range.location < 0 or byte_range.end > self.size:
            raise MalformedRangeError(byte_range, f"outside of file (size {self.size})")

        first = self.line_at(byte_range.location)
        prefix = first.content.encode("utf-8")[: byte_range.location - first.offset]
        if prefix.strip():
            raise MalformedRangeError(byte_range, "range starts in the middle of a line")

        last = self.line_at(byte_range.end - 1)
        if byte_range.end not in (last.content_end, last.end):
            raise MalformedRangeError(byte_range, "range ends in the middle of a line")

        return tuple(self._lines[first.index : last.index + 1])


def _leading_width(text: str) -> int:
    return len(text) - len(text.lstrip())


def _strip_line_markers(lines: tuple[Line, ...], byte_range: ByteRange) -> list[str]:
    texts = []
    for line in lines:
        body = line.content.lstrip()
        if not is_line_doc(body):
            raise MalformedRangeError(
                byte_range, f"line {line.index + 1} is not a '{LINE_DOC_MARKER}' comment"
            )
        texts.append(body[len(LINE_DOC_MARKER) :])
    return texts


def _strip_block_markers(
    lines: tuple[Line, ...], byte_range: ByteRange
) -> tuple[list[str], int, int]:
    """Strip ``/**`` and ``*/`` and return texts plus the kept line span.

    The opening line loses everything up to and including ``/**``; the other
    lines keep their physical indentation so nested lists survive.
    """
    texts = [lines[0].content.lstrip()[len(BLOCK_DOC_OPEN) :]]
    texts.extend(line.content for line in lines[1:])

    closing = texts[-1].rstrip()
    if not closing.endswith(BLOCK_DOC_CLOSE):
        raise MalformedRangeError(byte_range, "block comment is not closed")
    texts[-1] = closing[: -len(BLOCK_DOC_CLOSE)]

    start, stop = 0, len(texts)
    if len(texts) > 1:
        if not texts[0].strip():
            start = 1
        if not texts[-1].strip():
            stop -= 1

    # A "*" gutter is only stripped when every inner line carries one.
    inner = [t.lstrip() for t in texts[1:stop] if t.strip()]
    if inner and all(t.startswith("*") and not t.startswith(BLOCK_DOC_CLOSE) for t in inner):
        texts = [texts[0]] + [
            t.lstrip()[1:] if t.lstrip().startswith("*") else t for t in texts[1:]
        ]

    return texts, start, stop


def slice_doc_lines(byte_range: ByteRange, table: LineTable) -> tuple[SourceLine, ...]:
    """Extract the plain-text lines of a doc comment.

    Args:
        byte_range: Byte range covering exactly one doc comment
        table: Line table of the file the range belongs to

    Returns:
        Source lines in file order, marker and common indentation stripped

    Raises:
        MalformedRangeError: If the range does not cover whole comment lines
    """
    lines = kept = table.lines_in_range(byte_range)
    head = lines[0].content.lstrip()
    # Text sharing the line with "/**" is not part of the indentation baseline.
    opening_text = False

    if is_line_doc(head):
        texts = _strip_line_markers(lines, byte_range)
    elif head.startswith(BLOCK_DOC_OPEN):
        texts, start, stop = _strip_block_markers(lines, byte_range)
        opening_text = start == 0
        kept = lines[start:stop]
        texts = texts[start:stop]
    else:
        raise MalformedRangeError(byte_range, "range does not start with a doc comment marker")

    texts = [text.expandtabs() for text in texts]
    if opening_text:
        texts[0] = texts[0].strip()
    baseline = texts[1:] if opening_text else texts
    widths = [_leading_width(text) for text in baseline if text.strip()]
    common = min(widths) if widths else 0

    result = []
    for position, (line, text) in enumerate(zip(kept, texts)):
        column = _leading_width(line.content) if line.content.strip() else 0
        offset = table.byte_offset(line.index, column)
        content = text if opening_text and position == 0 else text[common:]
        result.append(
            SourceLine(
                content=content.rstrip(),
                offset=offset,
                length=line.end - offset,
            )
        )
    return tuple(result)


@dataclass(frozen=True)
class DocComment:
    """A doc comment under validation: its byte range and sliced lines."""

    byte_range: ByteRange
    lines: tuple[SourceLine, ...]

    @classmethod
    def from_range(cls, byte_range: ByteRange, table: LineTable) -> "DocComment":
        return cls(byte_range=byte_range, lines=slice_doc_lines(byte_range, table))

    @property
    def offset(self) -> int:
        return self.byte_range.location
