"""
Tests for the compact printer.
"""

import pytest

from condcss.errors import CompilerError
from condcss.printer import CompactPrinter
from condcss.stylesheet import parse_stylesheet


class TestCompactPrinter:

    def setup_method(self):
        self.printer = CompactPrinter()

    def _print(self, text):
        return self.printer.print_tree(parse_stylesheet(text))

    def test_ruleset(self):
        """Test selectors and declarations are minified"""
        assert self._print(".a, .b { color: red; margin: 0 auto; }") == ".a,.b{color:red;margin:0 auto}"

    def test_empty_ruleset(self):
        assert self._print(".a { }") == ".a{}"

    def test_operators_have_no_spaces(self):
        """Test ',' and '/' are printed without surrounding spaces"""
        assert self._print(".a { font: 12px / 1.5 a , b }") == ".a{font:12px/1.5 a,b}"

    def test_function_values(self):
        assert self._print(".a { border: 1px solid rgba(0, 0, 0, .5) }") == \
            ".a{border:1px solid rgba(0,0,0,.5)}"

    def test_important(self):
        assert self._print(".a { color: red !important; top: 0 }") == ".a{color:red!important;top:0}"

    def test_at_rules(self):
        """Test at-rules with and without bodies"""
        css = (
            "@import url(a.css);\n"
            "@media screen { .a { color: red } .b { color: blue } }\n"
            "@font-face { font-family: x; src: url(x.woff) }\n"
        )
        assert self._print(css) == (
            "@import url(a.css);"
            "@media screen{.a{color:red}.b{color:blue}}"
            "@font-face{font-family:x;src:url(x.woff)}"
        )

    def test_flush_clears_buffer(self):
        """Test that flush returns the snapshot and empties the buffer"""
        self._print(".a { color: red }")
        assert self.printer.flush() == ""

    def test_print_tree_is_repeatable(self):
        assert self._print(".a { c: 1 }") == self._print(".a { c: 1 }")

    def test_rejects_runtime_values(self):
        """Test that runtime values need the expression compiler"""
        with pytest.raises(CompilerError, match="cannot be printed as plain CSS"):
            self._print('.a { width: eval("w") }')

    def test_rejects_conditionals(self):
        with pytest.raises(CompilerError, match="ExpressionCompiler"):
            self._print('@if (eval("x")) { .a { c: 1 } }')
