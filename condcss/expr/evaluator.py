"""
Вычислитель выражений целевого языка.

Проходит по AST скомпилированного выражения и вычисляет его значение
в пространстве имён, где заданы значения условий и выражений времени
выполнения.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, cast

from .model import (
    BinaryExpr,
    BooleanLiteral,
    CallExpr,
    ConcatExpr,
    ConditionalExpr,
    Expr,
    ExprType,
    MemberExpr,
    NameExpr,
    NotExpr,
    NumberLiteral,
    StringLiteral,
)
from .parser import ExpressionParser


class EvaluationError(Exception):
    """Ошибка при вычислении выражения."""
    pass


def to_text(value: Any) -> str:
    """Строковое представление значения при конкатенации со строкой."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


class ExpressionEvaluator:
    """
    Вычислитель выражений.

    Принимает AST выражения и пространство имён, возвращает значение.
    """

    def __init__(self, namespace: Optional[Mapping[str, Any]] = None):
        """
        Args:
            namespace: Значения имён, встречающихся в выражении
        """
        self.namespace: Mapping[str, Any] = namespace or {}

    def evaluate(self, expr: Expr) -> Any:
        """
        Вычисляет значение выражения.

        Raises:
            EvaluationError: При ошибке вычисления (неизвестное имя, неверный тип)
        """
        expr_type = expr.get_type()

        if expr_type == ExprType.STRING:
            return cast(StringLiteral, expr).value
        elif expr_type == ExprType.NUMBER:
            return cast(NumberLiteral, expr).value
        elif expr_type == ExprType.BOOLEAN:
            return cast(BooleanLiteral, expr).value
        elif expr_type == ExprType.NULL:
            return None
        elif expr_type == ExprType.NAME:
            return self._evaluate_name(cast(NameExpr, expr))
        elif expr_type == ExprType.MEMBER:
            return self._evaluate_member(cast(MemberExpr, expr))
        elif expr_type == ExprType.CALL:
            return self._evaluate_call(cast(CallExpr, expr))
        elif expr_type == ExprType.NOT:
            return not self._evaluate_boolean(cast(NotExpr, expr).operand, "!")
        elif expr_type == ExprType.BINARY:
            return self._evaluate_binary(cast(BinaryExpr, expr))
        elif expr_type == ExprType.CONCAT:
            return self._evaluate_concat(cast(ConcatExpr, expr))
        elif expr_type == ExprType.CONDITIONAL:
            return self._evaluate_conditional(cast(ConditionalExpr, expr))
        else:
            raise EvaluationError(f"Unknown expression type: {expr_type}")

    def _evaluate_name(self, expr: NameExpr) -> Any:
        if expr.name not in self.namespace:
            raise EvaluationError(f"Unknown name '{expr.name}'")
        return self.namespace[expr.name]

    def _evaluate_member(self, expr: MemberExpr) -> Any:
        target = self.evaluate(expr.target)
        if isinstance(target, Mapping):
            if expr.name in target:
                return target[expr.name]
        elif hasattr(target, expr.name):
            return getattr(target, expr.name)
        raise EvaluationError(f"'{expr.target}' has no member '{expr.name}'")

    def _evaluate_call(self, expr: CallExpr) -> Any:
        callee = self.evaluate(expr.callee)
        if not callable(callee):
            raise EvaluationError(f"'{expr.callee}' is not callable")
        args = [self.evaluate(arg) for arg in expr.args]
        return callee(*args)

    def _evaluate_boolean(self, expr: Expr, operator: str) -> bool:
        value = self.evaluate(expr)
        if not isinstance(value, bool):
            raise EvaluationError(
                f"Operand of '{operator}' must be boolean, got {type(value).__name__}: {expr}"
            )
        return value

    def _evaluate_binary(self, expr: BinaryExpr) -> Any:
        if expr.operator == "&&":
            # Короткое вычисление
            if not self._evaluate_boolean(expr.left, "&&"):
                return False
            return self._evaluate_boolean(expr.right, "&&")
        if expr.operator == "||":
            if self._evaluate_boolean(expr.left, "||"):
                return True
            return self._evaluate_boolean(expr.right, "||")
        if expr.operator == "==":
            return self.evaluate(expr.left) == self.evaluate(expr.right)
        if expr.operator == "!=":
            return self.evaluate(expr.left) != self.evaluate(expr.right)
        raise EvaluationError(f"Unknown operator '{expr.operator}'")

    def _evaluate_concat(self, expr: ConcatExpr) -> Any:
        # Слева направо, как в Java: 1 + 2 + "a" == "3a"
        result = self.evaluate(expr.operands[0])
        for operand in expr.operands[1:]:
            value = self.evaluate(operand)
            if isinstance(result, str) or isinstance(value, str):
                result = to_text(result) + to_text(value)
            elif _is_number(result) and _is_number(value):
                result = result + value
            else:
                raise EvaluationError(
                    f"Cannot add {type(result).__name__} and {type(value).__name__}"
                )
        return result

    def _evaluate_conditional(self, expr: ConditionalExpr) -> Any:
        if self._evaluate_boolean(expr.test, "?:"):
            return self.evaluate(expr.then)
        return self.evaluate(expr.otherwise)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def evaluate_expression(text: str, namespace: Optional[Mapping[str, Any]] = None) -> Any:
    """
    Удобная функция для вычисления выражения из строки.

    Raises:
        ExpressionSyntaxError: При ошибке парсинга
        EvaluationError: При ошибке вычисления
    """
    ast = ExpressionParser().parse(text)
    return ExpressionEvaluator(namespace).evaluate(ast)


__all__ = ["EvaluationError", "ExpressionEvaluator", "evaluate_expression", "to_text"]
