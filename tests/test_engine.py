"""
Tests for the engine entry points and the JSON report.
"""

from pathlib import Path

import pytest

from condcss.config import CompilerOptions
from condcss.engine import compile_stylesheet, render_stylesheet, run_report
from condcss.errors import ConditionalChainError, StylesheetSyntaxError
from condcss.expr.evaluator import EvaluationError
from condcss.stylesheet import parse_stylesheet
from condcss.report import collect_stats

CSS = """
@if (eval("a")) {
  .x { w: eval("w") }
  @if (eval("b")) { .y { c: 1 } }
}
@elseif (eval("b")) { .z { c: value("t.c", "px") } }
.q { c: 2 }
"""


class TestEngine:

    def test_compile_and_render(self):
        expr = compile_stylesheet(CSS)
        assert render_stylesheet(CSS, {"a": True, "b": False, "w": "1px"}) == ".x{w:1px}.q{c:2}"
        assert render_stylesheet(CSS, {"a": False, "b": True, "t": {"c": 3}}) == ".z{c:3px}.q{c:2}"
        assert expr.startswith("((a) ? (")

    def test_render_missing_name(self):
        with pytest.raises(EvaluationError, match="Unknown name 'a'"):
            render_stylesheet(CSS, {})

    def test_syntax_error_propagates(self):
        with pytest.raises(StylesheetSyntaxError):
            compile_stylesheet("@else {}")


class TestReport:

    def test_stats(self):
        stats = collect_stats(parse_stylesheet(CSS))

        assert stats.conditional_blocks == 2
        assert stats.conditional_rules == 3
        assert stats.max_conditional_depth == 2
        assert stats.runtime_values == 2
        assert stats.conditions == ["a", "b"]

    def test_report(self):
        report = run_report(CSS, CompilerOptions(concat_limit=4), source=Path("site.css"))

        assert report.protocol == 1
        assert report.source == "site.css"
        assert report.expression == compile_stylesheet(CSS, CompilerOptions(concat_limit=4))
        assert report.length == len(report.expression)
        assert report.group_breaks == report.expression.count(") + (")
        assert report.options.concat_limit == 4
        assert report.stats.conditional_blocks == 2

    def test_report_json_dump(self):
        data = run_report(".a { c: 1 }").model_dump(mode="json")

        assert data["source"] is None
        assert data["expression"] == '(".a{c:1}")'
        assert data["options"] == {"concat_limit": 20}
        assert data["stats"]["conditions"] == []
        assert isinstance(data["tool_version"], str)
