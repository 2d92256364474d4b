"""
Обход AST таблицы стилей.

TreeWalker выполняет обход в глубину и вызывает обработчики входа/выхода,
зарегистрированные в HandlerRegistry для типа узла.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Type

from .stylesheet.nodes import StyleNode, child_nodes

# Обработчик входа: False означает "не обходить дочерние узлы"
EnterFunc = Callable[[StyleNode], bool]
LeaveFunc = Callable[[StyleNode], None]


@dataclass(frozen=True)
class NodeHandler:
    """Пара обработчиков для одного типа узла."""
    node_type: Type[StyleNode]
    enter: Optional[EnterFunc] = None
    leave: Optional[LeaveFunc] = None


class HandlerRegistry:
    """
    Реестр обработчиков узлов.

    Поиск выполняется по MRO типа узла, поэтому обработчик базового класса
    применяется к подклассам без собственной регистрации.
    """

    def __init__(self):
        self._handlers: Dict[Type[StyleNode], NodeHandler] = {}

    def register(
        self,
        node_type: Type[StyleNode],
        *,
        enter: Optional[EnterFunc] = None,
        leave: Optional[LeaveFunc] = None,
    ) -> None:
        """Регистрирует (или переопределяет) обработчики для типа узла."""
        self._handlers[node_type] = NodeHandler(node_type, enter, leave)

    def lookup(self, node_type: Type[StyleNode]) -> Optional[NodeHandler]:
        for klass in node_type.__mro__:
            handler = self._handlers.get(klass)
            if handler is not None:
                return handler
        return None

    def copy(self) -> HandlerRegistry:
        clone = HandlerRegistry()
        clone._handlers = dict(self._handlers)
        return clone


class TreeWalker:
    """Обход дерева в глубину с вызовом обработчиков входа и выхода."""

    def __init__(self, registry: HandlerRegistry):
        self.registry = registry

    def walk(self, node: StyleNode) -> None:
        handler = self.registry.lookup(type(node))

        descend = True
        if handler is not None and handler.enter is not None:
            descend = handler.enter(node) is not False

        if descend:
            for child in child_nodes(node):
                self.walk(child)

        # Выход вызывается даже если дочерние узлы пропущены
        if handler is not None and handler.leave is not None:
            handler.leave(node)


__all__ = ["EnterFunc", "LeaveFunc", "NodeHandler", "HandlerRegistry", "TreeWalker"]
