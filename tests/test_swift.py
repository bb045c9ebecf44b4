"""Tests for the Swift source scanner."""

import pytest

from structdoc.swift import (
    DeclarationKind,
    SourceReadError,
    SwiftFile,
    mask_comments_and_strings,
    parameter_names_from_clause,
)
from structdoc.types import ByteRange


class TestParameterNames:
    """Tests for parameter_names_from_clause."""

    @pytest.mark.parametrize(
        "clause, expected",
        [
            ("", ()),
            ("a: Int, b: Int", ("a", "b")),
            ("_ text: String, in range: Range<Int>", ("text", "range")),
            ("limit: Int = 10, flag: Bool = false", ("limit", "flag")),
            ("values: Int...", ("values",)),
            ("x: inout Int", ("x",)),
            ("map: [String: Int], pairs: [(Int, Int)]", ("map", "pairs")),
            (
                "completion: @escaping (Result<Int, Error>) -> Void, queue: DispatchQueue",
                ("completion", "queue"),
            ),
            ("`default`: Int, for `in`: Int", ("default", "in")),
            ("a: Bool = 1 < 2, b: Int, c: Int", ("a", "b", "c")),
            (
                "flag: Bool = x > y, limit: Int = max(1, 2), items: [Int] = []",
                ("flag", "limit", "items"),
            ),
            ("pairs: Dictionary<String, Int> = [:], c: Int", ("pairs", "c")),
            ("\n    a: Int,\n    b: Int\n", ("a", "b")),
        ],
    )
    def test_parameter_names(self, clause, expected):
        assert parameter_names_from_clause(clause) == expected


class TestMasking:
    """Tests for mask_comments_and_strings."""

    def test_preserves_length_and_newlines(self):
        """Test that masking keeps positions stable."""
        text = 'let s = "a // b"\n// func f(a: Int)\n/* x /* y */ z */func g() {}\n'

        masked = mask_comments_and_strings(text)

        assert len(masked) == len(text)
        assert masked.count("\n") == text.count("\n")
        assert "func f" not in masked
        assert masked.endswith("func g() {}\n")

    def test_escaped_quotes(self):
        """Test that escaped quotes do not end a string."""
        masked = mask_comments_and_strings('"a \\" func f(" + x')

        assert "func" not in masked
        assert masked.endswith("+ x")

    def test_multiline_string(self):
        """Test that triple-quoted strings are masked."""
        masked = mask_comments_and_strings('let s = """\nfunc f(a: Int)\n"""\n')

        assert "func" not in masked


class TestDeclarations:
    """Tests for declaration discovery."""

    def test_function_and_initializer(self):
        """Test that functions and initializers are found in order."""
        source = SwiftFile(
            "struct S {\n"
            "    init?(a: Int, b: Int) {}\n"
            "    func run<T: Equatable>(_ value: T, times count: Int) {}\n"
            "}\n"
        )

        declarations = source.declarations

        assert [d.name for d in declarations] == ["init", "run"]
        assert declarations[0].kind == DeclarationKind.INITIALIZER
        assert declarations[0].parameter_names == ("a", "b")
        assert declarations[1].kind == DeclarationKind.FUNCTION
        assert declarations[1].parameter_names == ("value", "count")

    def test_declaration_offset(self):
        """Test that the offset points at the keyword in bytes."""
        source = SwiftFile("/// Grüße.\nfunc f() {}\n")

        assert source.declarations[0].offset == 13

    def test_backticked_name(self):
        source = SwiftFile("func `default`(a: Int) {}\n")

        assert source.declarations[0].name == "default"

    def test_ignores_calls_and_comments(self):
        """Test that initializer calls, comments and strings are skipped."""
        source = SwiftFile(
            "init(a: Int) {\n"
            "    super.init(b: a)\n"
            "    self.init(c: a)\n"
            "}\n"
            "// func commented(a: Int) {}\n"
            'let s = "func quoted(a: Int)"\n'
        )

        assert [d.name for d in source.declarations] == ["init"]

    def test_multiline_parameter_clause(self):
        source = SwiftFile("func f(\n    a: Int,\n    b: Int\n) {}\n")

        assert source.declarations[0].parameter_names == ("a", "b")

    def test_unbalanced_clause_is_skipped(self):
        assert SwiftFile("func f(a: Int\n").declarations == []


class TestDocRange:
    """Tests for locating the doc comment above a declaration."""

    def test_line_comments(self):
        """Test a run of ``///`` lines."""
        source = SwiftFile("/// Summary.\n///\n/// - a: x\nfunc f(a: Int) {}\n")

        assert source.declarations[0].doc_range == ByteRange(0, 27)

    def test_attributes_are_skipped(self):
        """Test that attribute lines between comment and declaration are skipped."""
        source = SwiftFile("/// Summary.\n@discardableResult\nfunc f() -> Int { 1 }\n")

        assert source.declarations[0].doc_range == ByteRange(0, 12)

    def test_multiline_attribute_is_skipped(self):
        """Test that attribute arguments spanning several lines are skipped."""
        source = SwiftFile(
            "/// Summary.\n"
            "@available(*, deprecated,\n"
            "    message: \"Use g(a:)\")\n"
            "@discardableResult\n"
            "func f() -> Int { 1 }\n"
        )

        assert source.declarations[0].doc_range == ByteRange(0, 12)

    def test_indented_comment(self):
        """Test that the range starts at the comment marker."""
        source = SwiftFile("struct S {\n    /// Doc.\n    func f() {}\n}\n")

        declaration = source.declarations[0]
        assert declaration.doc_range == ByteRange(15, 8)
        assert declaration.offset == 28

    def test_block_comment(self):
        """Test a ``/** */`` block."""
        source = SwiftFile("/**\n Doc.\n */\nfunc f() {}\n")

        assert source.declarations[0].doc_range == ByteRange(0, 13)

    def test_multibyte_comment(self):
        """Test that the range length is counted in bytes."""
        source = SwiftFile("/// Grüße.\nfunc f() {}\n")

        assert source.declarations[0].doc_range == ByteRange(0, 12)

    @pytest.mark.parametrize(
        "text",
        [
            "/// Doc.\n\nfunc f() {}\n",
            "// Doc.\nfunc f() {}\n",
            "/* Doc. */\nfunc f() {}\n",
            "let x = 1\nfunc f() {}\n",
            "func f() {}\n",
            "////////\n//\n// Copyright header.\n//\n////////\nfunc f() {}\n",
            "/// Doc.\nlet x = foo(\n    1)\nfunc f() {}\n",
        ],
    )
    def test_undocumented(self, text):
        """Test declarations without an attached doc comment."""
        declaration = SwiftFile(text).declarations[0]

        assert declaration.doc_range is None
        assert not declaration.is_documented


class TestFromPath:
    """Tests for reading files."""

    def test_reads_file(self, tmp_path):
        path = tmp_path / "A.swift"
        path.write_text("func f() {}\n", encoding="utf-8")

        source = SwiftFile.from_path(path)

        assert source.path == path
        assert len(source.declarations) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceReadError):
            SwiftFile.from_path(tmp_path / "Missing.swift")

    def test_invalid_utf8(self, tmp_path):
        """Test that undecodable files raise SourceReadError."""
        path = tmp_path / "Bad.swift"
        path.write_bytes(b"func f() {}\n\xff\xfe\n")

        with pytest.raises(SourceReadError) as exc_info:
            SwiftFile.from_path(path)

        assert exc_info.value.path == path
