"""
Модели данных выражений целевого языка.

Скомпилированная таблица стилей представляет собой выражение из строковых литералов,
конкатенации, тернарного оператора и вставленных выражений времени
выполнения (имена, обращения к полям, вызовы, логические операторы).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

from ..escaping import quote_string_literal


class ExprType(Enum):
    """Типы узлов выражения."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    NAME = "name"
    MEMBER = "member"
    CALL = "call"
    NOT = "not"
    BINARY = "binary"
    CONCAT = "concat"
    CONDITIONAL = "conditional"


@dataclass
class Expr(ABC):
    """Базовый абстрактный класс для всех узлов выражения."""

    @abstractmethod
    def get_type(self) -> ExprType:
        pass

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        pass


@dataclass
class StringLiteral(Expr):
    """Строковый литерал "..." (значение уже без экранирования)."""
    value: str

    def get_type(self) -> ExprType:
        return ExprType.STRING

    def _to_string(self) -> str:
        return quote_string_literal(self.value)


@dataclass
class NumberLiteral(Expr):
    value: Union[int, float]

    def get_type(self) -> ExprType:
        return ExprType.NUMBER

    def _to_string(self) -> str:
        return str(self.value)


@dataclass
class BooleanLiteral(Expr):
    value: bool

    def get_type(self) -> ExprType:
        return ExprType.BOOLEAN

    def _to_string(self) -> str:
        return "true" if self.value else "false"


@dataclass
class NullLiteral(Expr):
    def get_type(self) -> ExprType:
        return ExprType.NULL

    def _to_string(self) -> str:
        return "null"


@dataclass
class NameExpr(Expr):
    """Имя из пространства имён вычисления."""
    name: str

    def get_type(self) -> ExprType:
        return ExprType.NAME

    def _to_string(self) -> str:
        return self.name


@dataclass
class MemberExpr(Expr):
    """Обращение к полю: target.name"""
    target: Expr
    name: str

    def get_type(self) -> ExprType:
        return ExprType.MEMBER

    def _to_string(self) -> str:
        return f"{self.target}.{self.name}"


@dataclass
class CallExpr(Expr):
    """Вызов: callee(args)"""
    callee: Expr
    args: List[Expr] = field(default_factory=list)

    def get_type(self) -> ExprType:
        return ExprType.CALL

    def _to_string(self) -> str:
        return f"{self.callee}({', '.join(str(a) for a in self.args)})"


@dataclass
class NotExpr(Expr):
    """Логическое отрицание: !operand"""
    operand: Expr

    def get_type(self) -> ExprType:
        return ExprType.NOT

    def _to_string(self) -> str:
        return f"!{self.operand}"


@dataclass
class BinaryExpr(Expr):
    """
    Бинарная операция: left op right

    Поддерживаемые операторы: ==, !=, &&, ||
    """
    operator: str
    left: Expr
    right: Expr

    def get_type(self) -> ExprType:
        return ExprType.BINARY

    def _to_string(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class ConcatExpr(Expr):
    """
    Цепочка '+' из двух и более операндов.

    Хранится плоским списком, чтобы длинные цепочки не превращались в глубокое дерево.
    """
    operands: List[Expr] = field(default_factory=list)

    def get_type(self) -> ExprType:
        return ExprType.CONCAT

    def _to_string(self) -> str:
        return "(" + " + ".join(str(o) for o in self.operands) + ")"


@dataclass
class ConditionalExpr(Expr):
    """Тернарный оператор: test ? then : otherwise"""
    test: Expr
    then: Expr
    otherwise: Expr

    def get_type(self) -> ExprType:
        return ExprType.CONDITIONAL

    def _to_string(self) -> str:
        return f"({self.test} ? {self.then} : {self.otherwise})"


__all__ = [
    "ExprType",
    "Expr",
    "StringLiteral",
    "NumberLiteral",
    "BooleanLiteral",
    "NullLiteral",
    "NameExpr",
    "MemberExpr",
    "CallExpr",
    "NotExpr",
    "BinaryExpr",
    "ConcatExpr",
    "ConditionalExpr",
]
