"""Structured function doc rule.

A function doc comment should consist of a short summary followed by a
parameters section that documents every parameter, in declaration order.
"""

from __future__ import annotations

from structdoc.matcher import validate_doc_comment
from structdoc.rules.base import (
    Example,
    Location,
    Rule,
    RuleDescription,
    RuleKind,
    StyleViolation,
)
from structdoc.rules.registry import register_rule
from structdoc.source import MalformedRangeError
from structdoc.swift import FunctionDeclaration, SwiftFile


@register_rule
class StructuredFunctionDocRule(Rule):
    """Checks that function doc comments list their parameters in order."""

    description = RuleDescription(
        identifier="structured_function_doc",
        name="Structured Function Doc",
        description=(
            "A function doc should be structured: a short summary followed by "
            "a parameters section listing every parameter in declaration order."
        ),
        kind=RuleKind.LINT,
        non_triggering_examples=(
            Example(
                "/// Creates a greeting.\n"
                "///\n"
                "/// - Parameters:\n"
                "///   - name: The person being greeted.\n"
                "///   - greeting: The greeting word.\n"
                "///   - punctuation: Trailing punctuation.\n"
                "func greet(name: String, greeting: String, punctuation: String) {}\n"
            ),
            Example(
                "/// Moves a point.\n"
                "///\n"
                "/// - Parameter point: The point to move.\n"
                "/// - Parameter dx: Horizontal distance.\n"
                "/// - Parameter dy: Vertical distance.\n"
                "func move(_ point: Point, by dx: Int, _ dy: Int) {}\n"
            ),
            Example(
                "/// Clamps a value.\n"
                "///\n"
                "/// - Parameter value: The value to clamp.\n"
                "/// - Parameter lower: Lower bound.\n"
                "/// - Parameter upper: Upper bound.\n"
                "/// - Returns: The clamped value.\n"
                "func clamp(value: Int, lower: Int, upper: Int) -> Int { value }\n"
            ),
            Example(
                "/**\n"
                " Creates a personalized greeting for a recipient.\n"
                "\n"
                " - Parameters:\n"
                "   - recipient: The person being greeted.\n"
                "   - greeting: The greeting word.\n"
                "   - punctuation: Trailing punctuation.\n"
                "\n"
                " - Returns: A new string saying hello to `recipient`.\n"
                " */\n"
                "func greeting(for recipient: String, greeting: String, punctuation: String) -> String {\n"
                "    greeting + recipient + punctuation\n"
                "}\n"
            ),
            Example(
                "/// Adds two numbers.\n"
                "func add(_ a: Int, _ b: Int) -> Int { a + b }\n"
            ),
            Example("func undocumented(a: Int, b: Int, c: Int) {}\n"),
            Example(
                "//////////////////////////////////////\n"
                "//\n"
                "// Copyright header.\n"
                "//\n"
                "//////////////////////////////////////\n"
                "func configure(host: String, port: Int, secure: Bool) {}\n"
            ),
            Example(
                "/// Creates a client.\n"
                "///\n"
                "/// - Parameter host: Server name.\n"
                "/// - Parameter port: Server port.\n"
                "/// - Parameter secure: Use TLS.\n"
                "@available(*, deprecated,\n"
                "           message: \"Use connect(to:)\")\n"
                "init(host: String, port: Int, secure: Bool) {}\n"
            ),
        ),
        triggering_examples=(
            Example(
                "/// Creates a greeting.\n"
                "///\n"
                "/// - Parameter name: The person being greeted.\n"
                "↓/// - Parameter punctuation: Trailing punctuation.\n"
                "/// - Parameter greeting: The greeting word.\n"
                "func greet(name: String, greeting: String, punctuation: String) {}\n"
            ),
            Example(
                "/// Creates a greeting.\n"
                "///\n"
                "/// - Parameters:\n"
                "///   - name: The person being greeted.\n"
                "↓///   - salutation: The greeting word.\n"
                "///   - punctuation: Trailing punctuation.\n"
                "func greet(name: String, greeting: String, punctuation: String) {}\n"
            ),
            Example(
                "↓/// Creates a greeting\n"
                "/// for somebody.\n"
                "///\n"
                "/// - Parameter name: The person being greeted.\n"
                "/// - Parameter greeting: The greeting word.\n"
                "/// - Parameter punctuation: Trailing punctuation.\n"
                "func greet(name: String, greeting: String, punctuation: String) {}\n"
            ),
            Example(
                "↓/// Creates a greeting.\n"
                "///\n"
                "/// - Parameter name: The person being greeted.\n"
                "/// - Parameter greeting: The greeting word.\n"
                "func greet(name: String, greeting: String, punctuation: String) {}\n"
            ),
            Example(
                "↓/// Creates a range.\n"
                "init(lower: Int, upper: Int, step: Int) {}\n"
            ),
            Example(
                "↓/// Creates a client.\n"
                "@available(*, deprecated,\n"
                "           message: \"Use connect(to:)\")\n"
                "init(host: String, port: Int, secure: Bool) {}\n"
            ),
        ),
    )

    def validate(self, file: SwiftFile) -> list[StyleViolation]:
        """Run the rule on every declaration of a file."""
        violations = []
        for declaration in file.declarations:
            violation = self.validate_declaration(declaration, file)
            if violation is not None:
                violations.append(violation)
        return violations

    def validate_declaration(
        self, declaration: FunctionDeclaration, file: SwiftFile
    ) -> StyleViolation | None:
        """Validate the doc comment of one declaration.

        Undocumented declarations and comments whose range cannot be sliced
        are skipped without a finding.
        """
        if declaration.doc_range is None:
            return None

        try:
            outcome = validate_doc_comment(
                declaration.doc_range,
                file.lines,
                declaration.parameter_names,
                self.configuration,
            )
        except MalformedRangeError as e:
            self.logger.debug("Skipping '%s': %s", declaration.name, e)
            return None

        if outcome.is_valid:
            return None

        path = str(file.path) if file.path is not None else None
        return StyleViolation(
            rule=self.description,
            severity=self.configuration.severity,
            location=Location.from_offset(path, file.lines, outcome.byte_offset),
            reason=outcome.reason or self.description.description,
        )
