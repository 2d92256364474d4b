"""
Компактный принтер таблицы стилей.

Сериализует обычное (безусловное) содержимое AST в минифицированный CSS,
накапливая текст во внутреннем буфере. Буфер забирается целиком через
flush(): снимок возвращается вызывающему, а буфер очищается.
"""

from __future__ import annotations

from typing import List, Optional

from .errors import CompilerError
from .stylesheet.nodes import (
    AtRuleNode,
    ConditionalBlockNode,
    ConditionalRuleNode,
    DeclarationNode,
    FunctionValue,
    LiteralValue,
    OperatorValue,
    RulesetNode,
    StyleNode,
    StylesheetNode,
    ValueNode,
)
from .walker import HandlerRegistry, TreeWalker


class CompactPrinter:
    """
    Компактный принтер CSS.

    Формат вывода:
      • набор правил: sel1,sel2{prop:val;prop2:val2}
      • значения разделяются одним пробелом, кроме ',' и '/'
      • at-правила: @media screen{...}, @font-face{...}, @import url(a.css);

    Условные блоки принтер не обрабатывает, это задача компилятора выражений.
    """

    def __init__(self):
        self._buffer: List[str] = []
        # Для каждого открытого блока объявлений: ещё не было ни одного объявления
        self._first_declaration: List[bool] = []
        # Для каждого открытого списка значений: предыдущий компонент
        self._previous_value: List[Optional[ValueNode]] = []

    def reset(self) -> None:
        self._buffer.clear()
        self._first_declaration.clear()
        self._previous_value.clear()

    def flush(self) -> str:
        """Возвращает накопленный текст и очищает буфер."""
        text = "".join(self._buffer)
        self._buffer.clear()
        return text

    def print_tree(self, root: StyleNode) -> str:
        """Печатает дерево без условных блоков в компактный CSS."""
        self.reset()
        TreeWalker(self.build_handlers()).walk(root)
        return self.flush()

    def build_handlers(self) -> HandlerRegistry:
        registry = HandlerRegistry()
        registry.register(StylesheetNode, enter=lambda node: True)
        registry.register(RulesetNode, enter=self._enter_ruleset, leave=self._leave_body)
        registry.register(AtRuleNode, enter=self._enter_at_rule, leave=self._leave_at_rule)
        registry.register(DeclarationNode, enter=self._enter_declaration, leave=self._leave_declaration)
        registry.register(LiteralValue, enter=self._print_value)
        registry.register(OperatorValue, enter=self._print_value)
        registry.register(FunctionValue, enter=self._enter_function, leave=self._leave_function)
        registry.register(ValueNode, enter=self._reject_value)
        registry.register(ConditionalBlockNode, enter=self._reject_conditional)
        registry.register(ConditionalRuleNode, enter=self._reject_conditional)
        return registry

    # ======= Значения =======

    def begin_value(self, node: ValueNode) -> None:
        """Пишет разделитель перед очередным компонентом значения."""
        previous = self._previous_value[-1]
        if previous is not None and not isinstance(previous, OperatorValue) \
                and not isinstance(node, OperatorValue):
            self._buffer.append(" ")

    def end_value(self, node: ValueNode) -> None:
        self._previous_value[-1] = node

    def _print_value(self, node: StyleNode) -> bool:
        self.begin_value(node)
        self._buffer.append(node.text)
        self.end_value(node)
        return False

    def _enter_function(self, node: FunctionValue) -> bool:
        self.begin_value(node)
        self._buffer.append(f"{node.name}(")
        self._previous_value.append(None)
        return True

    def _leave_function(self, node: FunctionValue) -> None:
        self._previous_value.pop()
        self._buffer.append(")")
        self.end_value(node)

    def _reject_value(self, node: StyleNode) -> bool:
        raise CompilerError(f"{type(node).__name__} cannot be printed as plain CSS")

    # ======= Правила =======

    def _enter_ruleset(self, node: RulesetNode) -> bool:
        self._buffer.append(",".join(node.selectors))
        self._open_declarations()
        return True

    def _enter_at_rule(self, node: AtRuleNode) -> bool:
        self._buffer.append(f"@{node.name}")
        if node.params:
            self._buffer.append(f" {node.params}")

        if node.rules is None and node.declarations is None:
            self._buffer.append(";")
            return False

        self._open_declarations()
        return True

    def _leave_at_rule(self, node: AtRuleNode) -> None:
        if node.rules is not None or node.declarations is not None:
            self._leave_body(node)

    def _open_declarations(self) -> None:
        self._buffer.append("{")
        self._first_declaration.append(True)

    def _leave_body(self, node: StyleNode) -> None:
        self._first_declaration.pop()
        self._buffer.append("}")

    def _enter_declaration(self, node: DeclarationNode) -> bool:
        if self._first_declaration[-1]:
            self._first_declaration[-1] = False
        else:
            self._buffer.append(";")
        self._buffer.append(f"{node.property}:")
        self._previous_value.append(None)
        return True

    def _leave_declaration(self, node: DeclarationNode) -> None:
        self._previous_value.pop()
        if node.important:
            self._buffer.append("!important")

    def _reject_conditional(self, node: StyleNode) -> bool:
        raise CompilerError("Conditional blocks must be compiled with ExpressionCompiler")


__all__ = ["CompactPrinter"]
