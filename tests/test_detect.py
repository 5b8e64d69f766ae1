"""
Tests for language detection and hint normalization.
"""

import pytest

from devtrans.detect import detect_language, normalize_language, resolve_language


class TestNormalizeLanguage:
    """Hints are mapped to canonical tags."""

    @pytest.mark.parametrize("hint,expected", [
        ("javascript", "js"),
        ("node", "js"),
        ("TypeScript", "ts"),
        ("tsx", "jsx"),
        ("react", "jsx"),
        ("py", "python"),
        ("text", "plain"),
    ])
    def test_aliases(self, hint, expected):
        assert normalize_language(hint) == expected

    @pytest.mark.parametrize("hint", ["go", "php", "rust", "c#", "kotlin", "cobol", ""])
    def test_languages_without_rewriter_become_plain(self, hint):
        assert normalize_language(hint) == "plain"


class TestDetectLanguage:
    """Ordered heuristics."""

    def test_markup_is_jsx(self):
        code = "<UserComponent>\n  <h1>welcome user</h1>\n</UserComponent>"
        assert detect_language(code) == "jsx"

    def test_unbalanced_markup_is_not_jsx(self):
        """A comparison is not markup."""
        assert detect_language("if (a < b && c > d) { run(); }") == "js"

    def test_python_def(self):
        assert detect_language("def greet():\n    return 'hi'") == "python"

    def test_python_bare_import(self):
        assert detect_language("import os\nprint(os.getcwd())") == "python"

    def test_python_colon_block(self):
        assert detect_language("if ready:\n    start()") == "python"

    def test_python_pass_block(self):
        assert detect_language("for x in items:\n    pass") == "python"

    def test_typescript_interface(self):
        assert detect_language("interface User {\n  name: string;\n}") == "ts"

    def test_typescript_type_alias(self):
        assert detect_language("type Id = number;") == "ts"

    def test_typed_parameter(self):
        assert detect_language("function greet(name: string) { return name; }") == "ts"

    def test_default_is_js(self):
        assert detect_language('const msg = "fetch user";') == "js"

    def test_whitespace_is_plain(self):
        assert detect_language("   \n\t") == "plain"


class TestResolveLanguage:

    def test_hint_wins_over_detection(self):
        assert resolve_language("def f():\n    pass", "js") == "js"

    def test_detection_without_hint(self):
        assert resolve_language("def f():\n    pass") == "python"
