"""
Tests for the expression evaluator.
"""

import pytest

from condcss.expr.evaluator import (
    EvaluationError,
    ExpressionEvaluator,
    evaluate_expression,
    to_text,
)
from condcss.expr.parser import ExpressionParser


class Theme:
    width = 10

    def color(self, name):
        return f"#{name}"


class TestExpressionEvaluator:

    def setup_method(self):
        self.parser = ExpressionParser()

    def _eval(self, text, **namespace):
        return ExpressionEvaluator(namespace).evaluate(self.parser.parse(text))

    def test_literals(self):
        assert self._eval('"a"') == "a"
        assert self._eval("3") == 3
        assert self._eval("true") is True
        assert self._eval("null") is None

    def test_names(self):
        assert self._eval("x", x="v") == "v"

    def test_unknown_name(self):
        with pytest.raises(EvaluationError, match="Unknown name 'x'"):
            self._eval("x")

    def test_member_access_on_mapping_and_object(self):
        assert self._eval("t.width", t={"width": "1px"}) == "1px"
        assert self._eval("t.width", t=Theme()) == 10
        assert self._eval('t.color("fff")', t=Theme()) == "#fff"

    def test_missing_member(self):
        with pytest.raises(EvaluationError, match="has no member 'height'"):
            self._eval("t.height", t={"width": 1})

    def test_call_requires_callable(self):
        with pytest.raises(EvaluationError, match="is not callable"):
            self._eval("f()", f="text")

    def test_concat_java_semantics(self):
        """Test left-to-right '+' with string promotion"""
        assert self._eval('1 + 2 + "a"') == "3a"
        assert self._eval('"a" + 1 + 2') == "a12"
        assert self._eval('"a" + true + null') == "atruenull"
        assert self._eval("a + b", a=1.5, b=2) == 3.5

    def test_concat_type_error(self):
        with pytest.raises(EvaluationError, match="Cannot add"):
            self._eval("a + b", a=True, b=1)

    def test_conditional(self):
        assert self._eval('c ? "yes" : "no"', c=True) == "yes"
        assert self._eval('c ? "yes" : "no"', c=False) == "no"

    def test_conditional_requires_boolean(self):
        """Test that the ternary test must be a boolean"""
        with pytest.raises(EvaluationError, match="must be boolean"):
            self._eval('c ? "yes" : "no"', c=1)

    def test_conditional_evaluates_one_branch(self):
        calls = []

        def branch(name):
            calls.append(name)
            return name

        assert self._eval('c ? f("a") : f("b")', c=True, f=branch) == "a"
        assert calls == ["a"]

    def test_logical_operators(self):
        assert self._eval("a && b", a=True, b=False) is False
        assert self._eval("a || b", a=False, b=True) is True
        assert self._eval("!a", a=False) is True
        # Короткое вычисление: правая часть не вычисляется
        assert self._eval("a && missing", a=False) is False
        assert self._eval("a || missing", a=True) is True

    def test_logical_operators_require_booleans(self):
        with pytest.raises(EvaluationError, match="Operand of '&&' must be boolean"):
            self._eval("a && b", a="x", b=True)
        with pytest.raises(EvaluationError, match="Operand of '!' must be boolean"):
            self._eval("!a", a=None)

    def test_equality(self):
        assert self._eval('a == "x"', a="x") is True
        assert self._eval('a != "x"', a="x") is False
        assert self._eval("a == null", a=None) is True

    def test_to_text(self):
        assert to_text("a") == "a"
        assert to_text(True) == "true"
        assert to_text(None) == "null"
        assert to_text(3) == "3"

    def test_evaluate_expression_helper(self):
        assert evaluate_expression('(x) ? ("a") : ("b")', {"x": False}) == "b"
