"""
Выражения целевого языка: лексер, парсер и вычислитель.

Используются для вычисления скомпилированных таблиц стилей
при известных значениях условий времени выполнения.
"""

from __future__ import annotations

from .evaluator import EvaluationError, ExpressionEvaluator, evaluate_expression
from .lexer import ExpressionLexer
from .parser import ExpressionParser, ExpressionSyntaxError

__all__ = [
    "EvaluationError",
    "ExpressionEvaluator",
    "ExpressionLexer",
    "ExpressionParser",
    "ExpressionSyntaxError",
    "evaluate_expression",
]
