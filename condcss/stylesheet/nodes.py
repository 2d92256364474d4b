"""
AST-узлы таблицы стилей.

Определяет иерархию неизменяемых классов узлов для представления
структуры таблицы стилей: правила, объявления, значения, at-правила
и условные блоки @if/@elseif/@else с условиями времени выполнения.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional

from ..escaping import quote_string_literal


@dataclass(frozen=True)
class StyleNode:
    """Базовый класс для всех узлов AST таблицы стилей."""
    pass


# ---------------------------------------------------------------------------
# Значения
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValueNode(StyleNode):
    """Базовый класс для компонентов значения свойства."""
    pass


@dataclass(frozen=True)
class LiteralValue(ValueNode):
    """
    Обычное литеральное значение: 1px, red, url(a.png), "quoted".

    Выводится компактным принтером как есть.
    """
    text: str


@dataclass(frozen=True)
class OperatorValue(ValueNode):
    """Разделитель внутри значения: ',' или '/'."""
    text: str


@dataclass(frozen=True)
class FunctionValue(ValueNode):
    """
    Функция в значении: rgba(0,0,0,.5).

    Аргументы могут содержать выражения времени выполнения.
    """
    name: str
    args: List[ValueNode] = field(default_factory=list)


@dataclass(frozen=True)
class RuntimeExpressionValue(ValueNode):
    """
    Выражение времени выполнения: eval("expr").

    Текст выражения вставляется в результат дословно, без экранирования.
    """
    expression: str


@dataclass(frozen=True)
class DotPathValue(ValueNode):
    """
    Ссылка по точечному пути: value("a.b", "suffix", "prefix").

    Путь вставляется в результат дословно; необязательные префикс и суффикс
    становятся строковыми литералами по обе стороны от пути.
    """
    path: str
    suffix: Optional[str] = None
    prefix: Optional[str] = None

    @property
    def expression(self) -> str:
        parts = []
        if self.prefix:
            parts.append(quote_string_literal(self.prefix))
        parts.append(self.path)
        if self.suffix:
            parts.append(quote_string_literal(self.suffix))
        return " + ".join(parts)


# ---------------------------------------------------------------------------
# Правила
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DeclarationNode(StyleNode):
    """Объявление свойства: prop: value [!important]."""
    property: str
    values: List[ValueNode] = field(default_factory=list)
    important: bool = False


@dataclass(frozen=True)
class RulesetNode(StyleNode):
    """Набор правил: селекторы и блок объявлений."""
    selectors: List[str]
    declarations: List[DeclarationNode] = field(default_factory=list)


@dataclass(frozen=True)
class AtRuleNode(StyleNode):
    """
    At-правило: @media, @supports, @font-face, @import и т.п.

    Тело может отсутствовать (@import ...;), содержать вложенные правила
    (@media) или объявления (@font-face).
    """
    name: str
    params: str = ""
    rules: Optional[List[StyleNode]] = None
    declarations: Optional[List[DeclarationNode]] = None


class ConditionalKind(enum.Enum):
    """Тип ветки условного блока."""
    IF = "if"
    ELSEIF = "elseif"
    ELSE = "else"


@dataclass(frozen=True)
class ConditionalRuleNode(StyleNode):
    """
    Одна ветка условного блока: @if, @elseif или @else.

    Для IF/ELSEIF condition содержит непрозрачный текст условия
    времени выполнения; для ELSE условие отсутствует.
    """
    kind: ConditionalKind
    condition: Optional[str] = None
    body: List[StyleNode] = field(default_factory=list)


@dataclass(frozen=True)
class ConditionalBlockNode(StyleNode):
    """Цепочка @if / @elseif* / @else? с общим решением."""
    rules: List[ConditionalRuleNode] = field(default_factory=list)


@dataclass(frozen=True)
class StylesheetNode(StyleNode):
    """Корень AST."""
    body: List[StyleNode] = field(default_factory=list)


def child_nodes(node: StyleNode) -> List[StyleNode]:
    """Возвращает дочерние узлы в порядке обхода."""
    if isinstance(node, StylesheetNode):
        return list(node.body)
    if isinstance(node, RulesetNode):
        return list(node.declarations)
    if isinstance(node, DeclarationNode):
        return list(node.values)
    if isinstance(node, FunctionValue):
        return list(node.args)
    if isinstance(node, AtRuleNode):
        if node.rules is not None:
            return list(node.rules)
        if node.declarations is not None:
            return list(node.declarations)
        return []
    if isinstance(node, ConditionalBlockNode):
        return list(node.rules)
    if isinstance(node, ConditionalRuleNode):
        return list(node.body)
    return []


__all__ = [
    "StyleNode",
    "ValueNode",
    "LiteralValue",
    "OperatorValue",
    "FunctionValue",
    "RuntimeExpressionValue",
    "DotPathValue",
    "DeclarationNode",
    "RulesetNode",
    "AtRuleNode",
    "ConditionalKind",
    "ConditionalRuleNode",
    "ConditionalBlockNode",
    "StylesheetNode",
    "child_nodes",
]
