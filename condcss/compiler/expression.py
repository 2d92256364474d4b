"""
Компилятор AST таблицы стилей в выражение целевого языка.

Например, таблица стилей

    @if (eval("com.foo.bar()")) {
      .foo { padding: 5px; }
    }
    @else {
      .foo { padding: 15px; }
    }
    .bar { width: 10px; }

компилируется в

    ((com.foo.bar()) ? (".foo{padding:5px}") : (".foo{padding:15px}")) + (".bar{width:10px}")

Выражение состоит только из строковых литералов, конкатенации `+`,
тернарного оператора `? :`, скобок и дословно вставленного текста условий
и выражений времени выполнения.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .builder import ExpressionBuilder, Part
from ..config import CompilerOptions
from ..errors import CompilerError, ConditionalChainError
from ..escaping import quote_string_literal
from ..printer import CompactPrinter
from ..stylesheet.nodes import (
    ConditionalBlockNode,
    ConditionalKind,
    ConditionalRuleNode,
    DotPathValue,
    RuntimeExpressionValue,
    StylesheetNode,
    ValueNode,
)
from ..walker import HandlerRegistry, TreeWalker

logger = logging.getLogger(__name__)


def validate_chain(block: ConditionalBlockNode) -> None:
    """
    Проверяет структуру цепочки @if/@elseif/@else.

    Raises:
        ConditionalChainError: Если цепочка некорректна
    """
    if not block.rules:
        raise ConditionalChainError("Conditional block has no rules")

    for index, rule in enumerate(block.rules):
        expected_if = index == 0
        if expected_if and rule.kind is not ConditionalKind.IF:
            raise ConditionalChainError(
                f"Conditional block must start with @if, got @{rule.kind.value}"
            )
        if not expected_if and rule.kind is ConditionalKind.IF:
            raise ConditionalChainError("@if can only start a conditional block")
        if rule.kind is ConditionalKind.ELSE:
            if index != len(block.rules) - 1:
                raise ConditionalChainError("@else must be the last rule of a conditional block")
            if rule.condition is not None:
                raise ConditionalChainError("@else cannot have a condition")
        elif not rule.condition:
            raise ConditionalChainError(f"@{rule.kind.value} requires a runtime condition")


class ExpressionCompiler:
    """
    Однопроходный компилятор AST в выражение.

    Обычное содержимое печатается CompactPrinter во внутренний буфер;
    компилятор перехватывает корень, условные блоки, ветки и специальные
    значения и забирает накопленный текст принтера перед каждым
    структурным фрагментом.
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()
        self.printer = CompactPrinter()

        self._builder = ExpressionBuilder()
        # Для каждого открытого условного блока: встречен ли @else
        self._else_seen: List[bool] = []
        self._concatenations = 0

        registry = self.printer.build_handlers()
        registry.register(StylesheetNode, enter=self._enter_tree, leave=self._leave_tree)
        registry.register(ConditionalBlockNode, enter=self._enter_block, leave=self._leave_block)
        registry.register(ConditionalRuleNode, enter=self._enter_rule, leave=self._leave_rule)
        registry.register(RuntimeExpressionValue, enter=self._splice_value)
        registry.register(DotPathValue, enter=self._splice_value)
        self.registry: HandlerRegistry = registry

    def compile(self, root: StylesheetNode) -> str:
        """
        Компилирует дерево в выражение.

        Args:
            root: Корень AST

        Returns:
            Текст выражения, вычисляемого в итоговый CSS

        Raises:
            ConditionalChainError: При некорректной цепочке условий
        """
        self._builder.reset()
        self._else_seen = []
        self._concatenations = 0
        self.printer.reset()

        TreeWalker(self.registry).walk(root)

        if self._else_seen:
            raise CompilerError(f"{len(self._else_seen)} conditional block(s) left open")

        expression = self._builder.build()
        logger.debug(
            "Compiled stylesheet -> %d chars, %d group break(s)",
            len(expression), self._builder.count(Part.GROUP),
        )
        return expression

    @property
    def group_breaks(self) -> int:
        """Количество разрывов группы в последнем скомпилированном выражении."""
        return self._builder.count(Part.GROUP)

    # ======= Корень =======

    def _enter_tree(self, node: StylesheetNode) -> bool:
        self._builder.append(Part.OPEN)
        return True

    def _leave_tree(self, node: StylesheetNode) -> None:
        self._flush()
        self._builder.append(Part.CLOSE)

    # ======= Условные блоки =======

    def _enter_block(self, node: ConditionalBlockNode) -> bool:
        validate_chain(node)

        self._flush()
        self._builder.append(Part.GROUP)
        self._else_seen.append(False)
        self._concatenations = 0
        return True

    def _leave_block(self, node: ConditionalBlockNode) -> None:
        if not self._pop_else_seen():
            # Неявный @else: у цепочки есть значение на любом пути
            self._builder.append_literal(quote_string_literal(""))
        self._builder.append(Part.GROUP)
        self._concatenations = 0

    def _enter_rule(self, node: ConditionalRuleNode) -> bool:
        if node.kind is ConditionalKind.ELSE:
            self._mark_else_seen()
            self._builder.append(Part.OPEN)
        else:
            self._require_open_block()
            self._builder.append(Part.OPEN)
            self._builder.append_raw(node.condition)
            self._builder.append(Part.THEN)
            self._concatenations = 0
        return True

    def _leave_rule(self, node: ConditionalRuleNode) -> None:
        self._flush()
        self._builder.append(Part.CLOSE)

        if node.kind is not ConditionalKind.ELSE:
            self._builder.append(Part.ELSE)

    def _require_open_block(self) -> None:
        if not self._else_seen:
            raise CompilerError("Conditional rule visited outside of a conditional block")

    def _mark_else_seen(self) -> None:
        self._require_open_block()
        self._else_seen[-1] = True

    def _pop_else_seen(self) -> bool:
        self._require_open_block()
        return self._else_seen.pop()

    # ======= Значения времени выполнения =======

    def _splice_value(self, node: ValueNode) -> bool:
        self.printer.begin_value(node)
        self._concat(f"({node.expression})")
        self.printer.end_value(node)
        return False

    def _concat(self, text: str) -> None:
        self._flush()
        self._append_concatenation()
        self._builder.append_raw(text)
        self._append_concatenation()

    def _append_concatenation(self) -> None:
        # Ограничиваем длину цепочки конкатенаций
        if self._concatenations >= self.options.concat_limit:
            self._builder.append(Part.GROUP)
            self._concatenations = 0
        else:
            self._builder.append(Part.CONCAT)
            self._concatenations += 1

    def _flush(self) -> None:
        self._builder.append_literal(quote_string_literal(self.printer.flush()))


__all__ = ["ExpressionCompiler", "validate_chain"]
