"""
Tests for the rewriters and their shared machinery.

Tests cover:
- The edit arena (out-of-order edits, overlap detection)
- Literal escaping helpers
- The lexical scanner (prefixes, raw strings, triple quotes, escapes)
- Structural span collection (template chunks, module specifiers)
- The plain-text fallback reporting contract
"""

import pytest

from devtrans.dictionary import StaticTermSource, build_entries
from devtrans.errors import GrammarUnavailable
from devtrans.models import SegmentKind
from devtrans.rewrite import (
    LexicalRewriter,
    LexicalScanner,
    ScannerProfile,
    StructuralRewriter,
    TextEdit,
    apply_edits,
    parse_source,
    translate_plain,
)
from devtrans.rewrite.base import (
    escape_jsx_attribute,
    escape_quoted,
    escape_template,
    escape_triple_quoted,
)
from devtrans.rewrite.lexical import CommentSpan, StringLiteral

from tests.conftest import TEST_TERMS


@pytest.fixture
def entries():
    return build_entries(StaticTermSource(TEST_TERMS).fetch_terms(), defaults={})


class TestApplyEdits:
    """Tests for the offset-addressed splice."""

    def test_edits_in_any_order(self):
        """Edits discovered right-to-left splice the same as left-to-right."""
        source = "a = 'x'; b = 'y'"
        edits = [TextEdit(13, 16, "'YY'"), TextEdit(4, 7, "'XX'")]

        assert apply_edits(source, edits) == "a = 'XX'; b = 'YY'"

    def test_no_edits_returns_source(self):
        assert apply_edits("unchanged", []) == "unchanged"

    def test_overlapping_edits_rejected(self):
        with pytest.raises(ValueError):
            apply_edits("abcdef", [TextEdit(0, 3, "x"), TextEdit(2, 4, "y")])

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            apply_edits("abc", [TextEdit(1, 10, "x")])


class TestEscaping:
    """Tests for escaping inserted literal content."""

    def test_quoted_doubles_backslashes_first(self):
        assert escape_quoted('a\\b"c', '"') == 'a\\\\b\\"c'

    def test_quoted_only_escapes_active_quote(self):
        assert escape_quoted("l'art \"x\"", "'") == "l\\'art \"x\""

    def test_triple_quoted_breaks_delimiter(self):
        """Only the full delimiter is escaped, on its last char."""
        assert escape_triple_quoted('say """hi"" ok', '"') == 'say ""\\"hi"" ok'

    def test_template(self):
        assert escape_template("a `b` ${c}") == "a \\`b\\` \\${c}"

    def test_jsx_attribute_uses_entities(self):
        """Attribute values have no backslash escapes."""
        assert escape_jsx_attribute("l'art \\ \"x\"", "'") == "l&apos;art \\ \"x\""
        assert escape_jsx_attribute('say "hi"', '"') == "say &quot;hi&quot;"


class TestLexicalScanner:
    """Tests for the hand-rolled scanner."""

    def setup_method(self):
        self.scanner = LexicalScanner(ScannerProfile())

    def test_comment_span_excludes_newline(self):
        spans = list(self.scanner.scan("x = 1  # note\ny = 2"))
        assert spans == [CommentSpan(7, 13)]

    def test_hash_inside_string_is_not_a_comment(self):
        spans = list(self.scanner.scan('s = "a # b"'))
        assert len(spans) == 1
        assert isinstance(spans[0], StringLiteral)

    def test_quote_inside_comment_is_not_a_string(self):
        spans = list(self.scanner.scan("# it's fine\nx = 1"))
        assert spans == [CommentSpan(0, 11)]

    def test_prefix_captured(self):
        literal = self.scanner.read_string('x = rb"data"', 6)
        assert literal.prefix == "rb"
        assert literal.start == 4

    def test_prefix_skipped_after_identifier(self):
        """Letters glued to an identifier are not a prefix."""
        literal = self.scanner.read_string('xr"data"', 2)
        assert literal.prefix == ""
        assert literal.start == 2

    def test_escaped_quote_does_not_terminate(self):
        source = 's = "say \\"hi\\" now"'
        literal = self.scanner.read_string(source, 4)
        assert literal.end == len(source)
        assert source[literal.content_start:literal.content_end] == 'say \\"hi\\" now'

    def test_raw_string_backslash_not_escape(self):
        source = 'p = r"C:\\" + "x"'
        literal = self.scanner.read_string(source, 5)
        assert source[literal.start:literal.end] == 'r"C:\\"'

    def test_triple_quoted(self):
        source = 'doc = """one "two" three"""'
        literal = self.scanner.read_string(source, 6)
        assert literal.triple
        assert literal.end == len(source)
        assert source[literal.content_start:literal.content_end] == 'one "two" three'

    def test_empty_string_is_not_triple(self):
        literal = self.scanner.read_string('x = ""', 4)
        assert not literal.triple
        assert literal.content_start == literal.content_end

    def test_unterminated_runs_to_end(self):
        source = 'x = "never closed\ny = 1'
        literal = self.scanner.read_string(source, 4)
        assert not literal.terminated
        assert literal.end == len(source)


class TestLexicalRewriter:
    """Tests for Python rewriting."""

    def test_comment_and_string(self, entries):
        code = 'def get_user():\n    # fetch user from db\n    message = "welcome user"\n    return message'
        result = LexicalRewriter().rewrite(code, entries, "python")

        assert result.code == (
            'def get_user():\n    # obtener usuario from db\n    message = "bienvenido usuario"\n    return message'
        )
        assert result.string_replacements == 1
        assert result.comment_replacements == 1
        assert [s.kind for s in result.segments] == [SegmentKind.COMMENT, SegmentKind.STRING]

    def test_segment_offsets(self, entries):
        code = "x = 1  # fetch"
        result = LexicalRewriter().rewrite(code, entries, "python")

        segment = result.segments[0]
        assert segment.start == code.index("#")
        assert segment.end == len(code)
        assert segment.original == "# fetch"
        assert segment.translated == "# obtener"

    def test_prefix_and_quotes_preserved(self, entries):
        code = "a = f'welcome {name}'\nb = rb\"data\"\nc = '''fetch user'''"
        result = LexicalRewriter().rewrite(code, entries, "python")

        assert result.code == "a = f'bienvenido {name}'\nb = rb\"datos\"\nc = '''obtener usuario'''"
        assert result.string_replacements == 3

    def test_inserted_quote_escaped(self, entries):
        code = "title = 'state of the art'"
        result = LexicalRewriter().rewrite(code, entries, "python")
        assert result.code == "title = 'état de l\\'art'"

    def test_existing_escapes_preserved(self, entries):
        code = 'msg = "fetch \\"user\\"\\n"'
        result = LexicalRewriter().rewrite(code, entries, "python")
        assert result.code == 'msg = "obtener \\"usuario\\"\\n"'

    def test_interpolation_translated_textually(self, entries):
        """Known limitation: f-string expressions are plain text to the scanner."""
        code = 'f"{user.name} welcome"'
        result = LexicalRewriter().rewrite(code, entries, "python")
        assert result.code == 'f"{usuario.name} bienvenido"'

    def test_unterminated_string_untouched(self, entries):
        code = 'x = "fetch user'
        result = LexicalRewriter().rewrite(code, entries, "python")
        assert result.code == code
        assert result.segments == []

    def test_identifiers_untouched(self, entries):
        code = "fetch_user = fetch(user)"
        result = LexicalRewriter().rewrite(code, entries, "python")
        assert result.code == code


class TestStructuralSpans:
    """Tests for grammar-neutral span collection."""

    def test_template_chunks_skip_substitutions(self):
        data = b"const v = `welcome ${user.name} and ${x}!`;"
        parsed = parse_source(data)

        chunks = [data[s.start:s.end] for s in parsed.spans if s.kind == "template_chunk"]
        assert chunks == [b"welcome ", b" and ", b"!"]

    def test_module_specifiers_skipped(self):
        data = b'import user from "./user";\nconst u = require("./user");\nconst m = "user";'
        parsed = parse_source(data)

        strings = [data[s.start:s.end] for s in parsed.spans if s.kind == "string"]
        assert strings == [b'"user"']

    def test_module_specifiers_kept_when_disabled(self):
        data = b'import user from "./user";'
        parsed = parse_source(data, skip_module_specifiers=False)

        assert [s.kind for s in parsed.spans] == ["string"]

    def test_jsx_attribute_kind(self):
        data = b'<input title="user" />;\nconst a = "user";'
        parsed = parse_source(data)

        assert [s.kind for s in parsed.spans] == ["jsx_attribute", "string"]

    def test_recoverable_errors_reported(self):
        parsed = parse_source(b'const a = "fetch";\nconst = ;\n')
        assert parsed.errors
        assert any(s.kind == "string" for s in parsed.spans)

    def test_unknown_grammar_raises(self):
        """A grammar that cannot be loaded is not a parse failure."""
        with pytest.raises(GrammarUnavailable):
            parse_source(b"const a = 1;", grammar="no-such-grammar")


class TestStructuralRewriter:
    """Tests for js/ts/jsx rewriting."""

    def test_quote_style_preserved(self, entries):
        code = "const a = 'fetch';\nconst b = \"fetch\";"
        result = StructuralRewriter().rewrite(code, entries, "js")
        assert result.code == "const a = 'obtener';\nconst b = \"obtener\";"

    def test_block_comment(self, entries):
        code = "/* fetch user */\nlet x = 1;"
        result = StructuralRewriter().rewrite(code, entries, "js")
        assert result.code == "/* obtener usuario */\nlet x = 1;"
        assert result.comment_replacements == 1

    def test_non_ascii_offsets_are_characters(self, entries):
        code = 'const título = "ñandú"; // fetch'
        result = StructuralRewriter().rewrite(code, entries, "js")

        segment = result.segments[0]
        assert segment.start == code.index("//")
        assert result.code == 'const título = "ñandú"; // obtener'

    def test_nested_template(self, entries):
        code = "const s = `welcome ${ok ? `fetch ${n}` : 'user'}`;"
        result = StructuralRewriter().rewrite(code, entries, "js")
        assert result.code == "const s = `bienvenido ${ok ? `obtener ${n}` : 'usuario'}`;"
        assert result.string_replacements == 3


class TestPlainFallback:
    """The fallback reports one aggregate segment and zero counters."""

    def test_reporting_contract(self, entries):
        code = 'func FetchUser() {\n    // fetch user\n    message := "welcome user"\n}'
        result = translate_plain(code, entries, "plain")

        assert result.used_fallback
        assert "obtener usuario" in result.code
        assert "bienvenido usuario" in result.code
        assert result.string_replacements == 0
        assert result.comment_replacements == 0
        assert len(result.segments) == 1
        assert result.segments[0].kind is SegmentKind.TEXT
        assert result.segments[0].start == 0
        assert result.segments[0].end == len(code)

    def test_no_match_no_segment(self, entries):
        result = translate_plain("nothing here", entries, "plain")
        assert result.used_fallback
        assert result.segments == []
