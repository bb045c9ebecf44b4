"""Structural matching of doc comments against function parameters.

The matcher makes the single pass/fail decision for one doc comment. Checks
run in a fixed order and the first failing check wins:

1. Functions with fewer parameters than the configured minimum are exempt.
2. The comment must split into a summary and a parameters block.
3. The summary must not exceed the configured line count (0 = unlimited).
4. The parameters block must parse into at least one entry.
5. The entry count must equal the parameter count.
6. Entries must document the parameters in declaration order.

Structural failures (2-5) are reported at the start of the doc comment; a
misnamed entry (6) is reported at the entry's own line.
"""

from __future__ import annotations

import logging
from typing import Sequence

from structdoc.blocks import NoBoundaryFoundError, split_blocks
from structdoc.config import RuleConfiguration
from structdoc.params import ParameterListError, parse_parameter_list
from structdoc.source import DocComment, LineTable
from structdoc.types import ByteRange, ValidationOutcome

logger = logging.getLogger(__name__)


def is_exempt(parameter_names: Sequence[str], config: RuleConfiguration) -> bool:
    """Check whether a function is below the parameter count threshold."""
    return len(parameter_names) < config.minimal_number_of_parameters


def match_structure(
    doc: DocComment,
    parameter_names: Sequence[str],
    config: RuleConfiguration,
) -> ValidationOutcome:
    """Match a sliced doc comment against the function's parameter names.

    Args:
        doc: Doc comment with its sliced lines
        parameter_names: Parameter names in declaration order
        config: Rule configuration

    Returns:
        ValidationOutcome, invalid outcomes carry the offending byte offset
    """
    if is_exempt(parameter_names, config):
        return ValidationOutcome.valid()

    try:
        blocks = split_blocks(doc.lines)
    except NoBoundaryFoundError:
        return ValidationOutcome.invalid(
            doc.offset, "Doc comment has no parameters section"
        )
    if blocks.summary is None:
        return ValidationOutcome.invalid(doc.offset, "Doc comment has no summary")

    max_lines = config.max_summary_line_count
    if max_lines > 0 and len(blocks.summary) > max_lines:
        return ValidationOutcome.invalid(
            doc.offset,
            f"Summary has {len(blocks.summary)} lines, at most {max_lines} allowed",
        )

    try:
        parameters = parse_parameter_list(blocks.parameters)
    except ParameterListError as e:
        logger.debug("Unparseable parameters section at offset %d: %s", doc.offset, e)
        return ValidationOutcome.invalid(doc.offset, f"Malformed parameters section: {e.reason}")
    if not parameters.entries:
        return ValidationOutcome.invalid(doc.offset, "Parameters section lists no parameters")

    if len(parameters) != len(parameter_names):
        return ValidationOutcome.invalid(
            doc.offset,
            f"Documents {len(parameters)} parameters, function has {len(parameter_names)}",
        )

    for entry, name in zip(parameters, parameter_names):
        if not entry.documents(name):
            return ValidationOutcome.invalid(
                entry.offset, f"Expected parameter '{name}', found '{entry.name}'"
            )

    return ValidationOutcome.valid()


def validate_doc_comment(
    doc_range: ByteRange,
    table: LineTable,
    parameter_names: Sequence[str],
    config: RuleConfiguration | None = None,
) -> ValidationOutcome:
    """Validate the doc comment attached to one function declaration.

    Args:
        doc_range: Byte range of the doc comment
        table: Line table of the file containing the comment
        parameter_names: Parameter names in declaration order
        config: Rule configuration (defaults apply when None)

    Returns:
        ValidationOutcome for the comment

    Raises:
        MalformedRangeError: If the range cannot be sliced into comment lines
    """
    config = config or RuleConfiguration()
    if is_exempt(parameter_names, config):
        return ValidationOutcome.valid()

    doc = DocComment.from_range(doc_range, table)
    return match_structure(doc, parameter_names, config)
