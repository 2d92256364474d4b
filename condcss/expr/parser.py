"""
Парсер выражений целевого языка с рекурсивным спуском.

Грамматика:
expression → ternary
ternary    → or ("?" expression ":" ternary)?
or         → and ("||" and)*
and        → equality ("&&" equality)*
equality   → additive (("==" | "!=") additive)*
additive   → unary ("+" unary)*
unary      → "!" unary | postfix
postfix    → primary ("." IDENTIFIER | "(" arguments? ")")*
primary    → STRING | NUMBER | "true" | "false" | "null" | IDENTIFIER | "(" expression ")"

Цепочки "+" собираются в плоский ConcatExpr циклом, без рекурсии.
"""

from __future__ import annotations

from typing import List

from .lexer import ExpressionLexer, Token
from .model import (
    BinaryExpr,
    BooleanLiteral,
    CallExpr,
    ConcatExpr,
    ConditionalExpr,
    Expr,
    MemberExpr,
    NameExpr,
    NotExpr,
    NullLiteral,
    NumberLiteral,
    StringLiteral,
)
from ..escaping import unescape_string_literal


class ExpressionSyntaxError(Exception):
    """Ошибка парсинга выражения."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Parse error at position {position}: {message}")


class ExpressionParser:
    """
    Парсер выражений целевого языка.

    Преобразует список токенов в AST, соблюдая приоритеты операторов.
    """

    def __init__(self):
        self.lexer = ExpressionLexer()
        self._tokens: List[Token] = []
        self._position = 0

    def parse(self, text: str) -> Expr:
        """
        Парсит строку выражения в AST.

        Raises:
            ExpressionSyntaxError: При синтаксической ошибке
        """
        try:
            self._tokens = self.lexer.tokenize(text)
        except ValueError as e:
            raise ExpressionSyntaxError(str(e), 0) from e
        self._position = 0

        if self._is_at_end():
            raise ExpressionSyntaxError("Empty expression", 0)

        result = self._parse_expression()

        if not self._is_at_end():
            current = self._current_token()
            raise ExpressionSyntaxError(f"Unexpected token '{current.value}'", current.position)

        return result

    def _parse_expression(self) -> Expr:
        return self._parse_ternary()

    def _parse_ternary(self) -> Expr:
        test = self._parse_or()

        if self._match_operator("?"):
            then = self._parse_expression()
            if not self._match_operator(":"):
                raise ExpressionSyntaxError("Expected ':' in conditional expression", self._current_position())
            otherwise = self._parse_ternary()  # Правая ассоциативность
            return ConditionalExpr(test=test, then=then, otherwise=otherwise)

        return test

    def _parse_or(self) -> Expr:
        left = self._parse_and()
        while self._match_operator("||"):
            left = BinaryExpr(operator="||", left=left, right=self._parse_and())
        return left

    def _parse_and(self) -> Expr:
        left = self._parse_equality()
        while self._match_operator("&&"):
            left = BinaryExpr(operator="&&", left=left, right=self._parse_equality())
        return left

    def _parse_equality(self) -> Expr:
        left = self._parse_additive()
        while True:
            if self._match_operator("=="):
                left = BinaryExpr(operator="==", left=left, right=self._parse_additive())
            elif self._match_operator("!="):
                left = BinaryExpr(operator="!=", left=left, right=self._parse_additive())
            else:
                return left

    def _parse_additive(self) -> Expr:
        operands = [self._parse_unary()]
        while self._match_operator("+"):
            operands.append(self._parse_unary())

        if len(operands) == 1:
            return operands[0]
        return ConcatExpr(operands=operands)

    def _parse_unary(self) -> Expr:
        if self._match_operator("!"):
            return NotExpr(operand=self._parse_unary())
        return self._parse_postfix()

    def _parse_postfix(self) -> Expr:
        expr = self._parse_primary()

        while True:
            if self._match_operator("."):
                name = self._current_token()
                if name.type != 'IDENTIFIER':
                    raise ExpressionSyntaxError("Expected member name after '.'", name.position)
                self._advance()
                expr = MemberExpr(target=expr, name=name.value)
            elif self._match_operator("("):
                expr = CallExpr(callee=expr, args=self._parse_arguments())
            else:
                return expr

    def _parse_arguments(self) -> List[Expr]:
        args: List[Expr] = []
        if self._match_operator(")"):
            return args

        while True:
            args.append(self._parse_expression())
            if self._match_operator(")"):
                return args
            if not self._match_operator(","):
                raise ExpressionSyntaxError("Expected ',' or ')' in argument list", self._current_position())

    def _parse_primary(self) -> Expr:
        current = self._current_token()

        if self._match_operator("("):
            expr = self._parse_expression()
            if not self._match_operator(")"):
                raise ExpressionSyntaxError("Expected ')' after grouped expression", self._current_position())
            return expr

        if current.type == 'STRING':
            self._advance()
            try:
                return StringLiteral(value=unescape_string_literal(current.value[1:-1]))
            except ValueError as e:
                raise ExpressionSyntaxError(str(e), current.position) from e

        if current.type == 'NUMBER':
            self._advance()
            value = float(current.value) if "." in current.value else int(current.value)
            return NumberLiteral(value=value)

        if current.type == 'KEYWORD':
            self._advance()
            if current.value == "null":
                return NullLiteral()
            return BooleanLiteral(value=current.value == "true")

        if current.type == 'IDENTIFIER':
            self._advance()
            return NameExpr(name=current.value)

        if current.type == 'EOF':
            raise ExpressionSyntaxError("Unexpected end of expression", current.position)
        raise ExpressionSyntaxError(f"Unexpected token '{current.value}'", current.position)

    # Вспомогательные методы для работы с токенами

    def _current_token(self) -> Token:
        if self._position >= len(self._tokens):
            return self._tokens[-1]
        return self._tokens[self._position]

    def _current_position(self) -> int:
        return self._current_token().position

    def _is_at_end(self) -> bool:
        return self._current_token().type == 'EOF'

    def _advance(self) -> Token:
        current = self._current_token()
        if not self._is_at_end():
            self._position += 1
        return current

    def _match_operator(self, operator: str) -> bool:
        current = self._current_token()
        if current.type == 'OPERATOR' and current.value == operator:
            self._advance()
            return True
        return False


__all__ = ["ExpressionParser", "ExpressionSyntaxError"]
