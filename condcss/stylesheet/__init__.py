"""
Синтаксис таблиц стилей: узлы AST, лексер и парсер.

Поддерживает:
- наборы правил, объявления, at-правила (@media, @font-face, @import)
- @if (eval("...")) {...} @elseif (eval("...")) {...} @else {...} - условия времени выполнения
- eval("expr") и value("a.b", "suffix", "prefix") в значениях свойств
"""

from __future__ import annotations

from .nodes import (
    AtRuleNode,
    ConditionalBlockNode,
    ConditionalKind,
    ConditionalRuleNode,
    DeclarationNode,
    DotPathValue,
    FunctionValue,
    LiteralValue,
    OperatorValue,
    RulesetNode,
    RuntimeExpressionValue,
    StyleNode,
    StylesheetNode,
    ValueNode,
)
from .parser import StylesheetParser, parse_stylesheet

__all__ = [
    "AtRuleNode",
    "ConditionalBlockNode",
    "ConditionalKind",
    "ConditionalRuleNode",
    "DeclarationNode",
    "DotPathValue",
    "FunctionValue",
    "LiteralValue",
    "OperatorValue",
    "RulesetNode",
    "RuntimeExpressionValue",
    "StyleNode",
    "StylesheetNode",
    "ValueNode",
    "StylesheetParser",
    "parse_stylesheet",
]
