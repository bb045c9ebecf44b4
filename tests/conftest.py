"""Shared fixtures for structdoc tests."""

import pytest

from structdoc.config import RuleConfiguration
from structdoc.source import LineTable, SourceLine
from structdoc.types import ByteRange


@pytest.fixture
def config() -> RuleConfiguration:
    """Default rule configuration (max summary 1 line, threshold 3)."""
    return RuleConfiguration()


@pytest.fixture
def doc_comment():
    """Build a file containing a ``///`` doc comment.

    Returns a factory ``build(*lines, indent="")`` producing
    ``(table, doc_range)``; each argument is one comment line without marker.
    """

    def build(*lines: str, indent: str = "", trailer: str = "func f() {}\n"):
        comment = "".join(f"{indent}/// {line}".rstrip() + "\n" for line in lines)
        table = LineTable.from_text(comment + trailer)
        start = len(indent)
        end = len(comment.encode("utf-8")) - 1
        return table, ByteRange(start, end - start)

    return build


@pytest.fixture
def source_lines():
    """Build SourceLine tuples from plain contents, 100 bytes apart."""

    def build(*contents: str) -> tuple[SourceLine, ...]:
        return tuple(
            SourceLine(content=content, offset=index * 100, length=len(content) + 1)
            for index, content in enumerate(contents)
        )

    return build
