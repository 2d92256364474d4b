"""
Tests for string literal escaping.
"""

import pytest

from condcss.escaping import escape_string_literal, quote_string_literal, unescape_string_literal


class TestEscaping:

    def test_plain_text_is_unchanged(self):
        assert escape_string_literal(".a{color:red}") == ".a{color:red}"

    def test_quotes_and_backslashes(self):
        assert escape_string_literal('a"b\\c') == 'a\\"b\\\\c'

    def test_control_characters(self):
        assert escape_string_literal("\t\n\r\b\f") == "\\t\\n\\r\\b\\f"
        assert escape_string_literal("\x01\x7f") == "\\u0001\\u007f"

    def test_line_separators(self):
        """Test characters that would break a string literal in some targets"""
        assert escape_string_literal("\u2028\u2029") == "\\u2028\\u2029"

    def test_non_ascii_passes_through(self):
        assert escape_string_literal("→ ü 😀") == "→ ü 😀"

    def test_quote(self):
        assert quote_string_literal("") == '""'
        assert quote_string_literal('x"') == '"x\\""'

    @pytest.mark.parametrize("text", [
        "",
        'content:"\\"x\\""',
        "line\nbreak\ttab\x00nul\x7f",
        "\u2028 → 😀",
    ])
    def test_unescape_inverts_escape(self, text):
        assert unescape_string_literal(escape_string_literal(text)) == text

    def test_surrogate_pairs(self):
        assert unescape_string_literal("\\ud83d\\ude00") == "\U0001F600"

    def test_invalid_sequences(self):
        with pytest.raises(ValueError, match="Dangling backslash"):
            unescape_string_literal("abc\\")
        with pytest.raises(ValueError, match="Invalid unicode escape"):
            unescape_string_literal("\\u12")
        with pytest.raises(ValueError, match="Invalid escape sequence"):
            unescape_string_literal("\\x41")
