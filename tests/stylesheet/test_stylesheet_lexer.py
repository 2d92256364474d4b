"""
Tests for the stylesheet lexer.
"""

import pytest

from condcss.errors import StylesheetSyntaxError
from condcss.stylesheet.lexer import StylesheetLexer
from condcss.stylesheet.tokens import TokenType


class TestStylesheetLexer:

    def setup_method(self):
        self.lexer = StylesheetLexer()

    def _types(self, text):
        return [t.type for t in self.lexer.tokenize(text)]

    def test_simple_ruleset(self):
        """Test tokenization of a compact ruleset"""
        assert self._types(".a{p:1px}") == [
            TokenType.WORD,
            TokenType.SYMBOL,
            TokenType.WORD,
            TokenType.SYMBOL,
            TokenType.WORD,
            TokenType.SYMBOL,
            TokenType.EOF,
        ]

    def test_comments_are_dropped(self):
        """Test that comments produce no tokens"""
        tokens = self.lexer.tokenize("/* header */.a/* inline */{}")
        values = [t.value for t in tokens if t.type is not TokenType.EOF]
        assert values == [".a", "{", "}"]

    def test_multiline_comment(self):
        """Test that a comment may span several lines"""
        tokens = self.lexer.tokenize("/* a\n b */x")
        assert tokens[0].value == "x"
        assert tokens[0].line == 2

    def test_at_keyword_and_function(self):
        """Test at-keywords and function tokens"""
        tokens = self.lexer.tokenize('@if (eval("x"))')
        assert tokens[0].type is TokenType.AT_KEYWORD
        assert tokens[0].value == "@if"
        assert tokens[3].type is TokenType.FUNCTION
        assert tokens[3].value == "eval("
        assert tokens[4].type is TokenType.STRING
        assert tokens[4].value == '"x"'

    def test_unquoted_url_is_single_token(self):
        """Test url(...) without quotes is kept as one literal"""
        tokens = self.lexer.tokenize("url(img/a.png)")
        assert tokens[0].type is TokenType.URL
        assert tokens[0].value == "url(img/a.png)"

    def test_string_with_escapes(self):
        """Test escaped quotes inside strings"""
        tokens = self.lexer.tokenize(r'"a\"b" ' + r"'c\'d'")
        strings = [t.value for t in tokens if t.type is TokenType.STRING]
        assert strings == [r'"a\"b"', r"'c\'d'"]

    def test_line_and_column_tracking(self):
        """Test positions of tokens after newlines"""
        tokens = self.lexer.tokenize("a\n  b")
        b = tokens[2]
        assert b.value == "b"
        assert (b.line, b.column) == (2, 3)

    def test_unterminated_comment(self):
        """Test error on unterminated comment"""
        with pytest.raises(StylesheetSyntaxError, match="Unterminated comment") as exc:
            self.lexer.tokenize(".a{}\n/* oops")
        assert exc.value.line == 2
        assert exc.value.column == 1

    def test_unterminated_string(self):
        """Test error on unterminated string"""
        with pytest.raises(StylesheetSyntaxError, match="Unexpected character"):
            self.lexer.tokenize('.a{content:"abc}')

    def test_eof_token(self):
        """Test that EOF is always the last token"""
        tokens = self.lexer.tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type is TokenType.EOF
