"""structdoc - Structural linting of function documentation comments."""

from structdoc.config import ConfigurationError, RuleConfiguration, load_config
from structdoc.linter import lint_paths
from structdoc.matcher import match_structure, validate_doc_comment
from structdoc.report import Report
from structdoc.rules import StructuredFunctionDocRule, StyleViolation, registry
from structdoc.source import LineTable, MalformedRangeError, SourceLine, slice_doc_lines
from structdoc.swift import FunctionDeclaration, SwiftFile
from structdoc.types import ByteRange, Severity, ValidationOutcome

# Version: Single source of truth from pyproject.toml
try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("structdoc")
except PackageNotFoundError:
    # Package not installed (development mode)
    __version__ = "0.0.0.dev"

__all__ = [
    # Core API
    "validate_doc_comment",
    "match_structure",
    "lint_paths",
    # Source model
    "ByteRange",
    "LineTable",
    "SourceLine",
    "slice_doc_lines",
    "MalformedRangeError",
    "SwiftFile",
    "FunctionDeclaration",
    # Rules and results
    "StructuredFunctionDocRule",
    "StyleViolation",
    "ValidationOutcome",
    "Severity",
    "Report",
    "registry",
    # Configuration
    "RuleConfiguration",
    "ConfigurationError",
    "load_config",
    "__version__",
]
