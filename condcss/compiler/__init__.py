"""
Компилятор таблиц стилей с условиями времени выполнения в выражения.
"""

from __future__ import annotations

from .builder import ExpressionBuilder, Part
from .expression import ExpressionCompiler, validate_chain

__all__ = [
    "ExpressionBuilder",
    "Part",
    "ExpressionCompiler",
    "validate_chain",
]
