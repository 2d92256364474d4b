"""
Парсер таблицы стилей с рекурсивным спуском.

Строит AST из последовательности токенов. Поддерживает наборы правил,
at-правила, условные блоки времени выполнения и специальные значения
eval("...") / value("...").

Грамматика (упрощенно):
stylesheet   → rule*
rule         → conditional | at_rule | ruleset
conditional  → "@if" condition block ("@elseif" condition block)* ("@else" block)?
condition    → "(" "!"* "eval(" STRING ")" ")"
block        → "{" rule* "}"
at_rule      → AT_KEYWORD params (";" | "{" (rule* | declaration*) "}")
ruleset      → selectors "{" declaration* "}"
declaration  → WORD ":" value+ ("!" "important")? ";"?
value        → WORD | STRING | URL | "," | "/" | eval | dotpath | function
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from .lexer import StylesheetLexer
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
from .tokens import Token, TokenType
from ..errors import StylesheetSyntaxError

logger = logging.getLogger(__name__)

_STRING_ESCAPE = re.compile(r"\\(.)", re.DOTALL)


def unquote(token_value: str) -> str:
    """Снимает кавычки со строкового токена и раскрывает экранирование."""
    return _STRING_ESCAPE.sub(r"\1", token_value[1:-1])


class StylesheetParser:
    """
    Парсер таблиц стилей.

    Преобразует текст в StylesheetNode. Цепочки условных блоков проверяются
    на этапе разбора: @elseif/@else без предшествующего @if являются ошибкой.
    """

    # At-правила, тело которых состоит из объявлений, а не из правил
    DECLARATION_AT_RULES = {"font-face", "page", "viewport", "counter-style"}

    def __init__(self):
        self.lexer = StylesheetLexer()
        self._tokens: List[Token] = []
        self._position = 0

    def parse(self, text: str) -> StylesheetNode:
        """
        Парсит текст таблицы стилей в AST.

        Raises:
            StylesheetSyntaxError: При синтаксической ошибке
        """
        self._tokens = self.lexer.tokenize(text)
        self._position = 0

        body = self._parse_rule_list(nested=False)
        logger.debug("Parsed stylesheet -> %d top-level nodes", len(body))
        return StylesheetNode(body=body)

    # ======= Правила =======

    def _parse_rule_list(self, *, nested: bool) -> List[StyleNode]:
        rules: List[StyleNode] = []
        while True:
            self._skip_whitespace()
            current = self._current()
            if current.type is TokenType.EOF:
                if nested:
                    self._error("Unexpected end of input, expected '}'", current)
                return rules
            if nested and current.is_symbol("}"):
                return rules
            if current.is_symbol(";"):
                self._advance()
                continue
            rules.append(self._parse_rule())

    def _parse_rule(self) -> StyleNode:
        current = self._current()
        if current.type is TokenType.AT_KEYWORD:
            name = current.value[1:].lower()
            if name == "if":
                return self._parse_conditional_block()
            if name in ("elseif", "else"):
                self._error(f"'@{name}' without preceding '@if'", current)
            return self._parse_at_rule()
        return self._parse_ruleset()

    def _parse_conditional_block(self) -> ConditionalBlockNode:
        rules = [self._parse_conditional_rule(ConditionalKind.IF)]

        while True:
            self._skip_whitespace()
            current = self._current()
            if current.type is not TokenType.AT_KEYWORD:
                break
            name = current.value[1:].lower()
            if name == "elseif":
                rules.append(self._parse_conditional_rule(ConditionalKind.ELSEIF))
            elif name == "else":
                rules.append(self._parse_conditional_rule(ConditionalKind.ELSE))
                # @else всегда завершает цепочку
                break
            else:
                break

        return ConditionalBlockNode(rules=rules)

    def _parse_conditional_rule(self, kind: ConditionalKind) -> ConditionalRuleNode:
        self._advance()  # @if / @elseif / @else

        condition: Optional[str] = None
        if kind is not ConditionalKind.ELSE:
            self._skip_whitespace()
            self._expect_symbol("(")
            condition = self._parse_runtime_condition()
            self._expect_symbol(")")

        self._skip_whitespace()
        self._expect_symbol("{")
        body = self._parse_rule_list(nested=True)
        self._expect_symbol("}")

        return ConditionalRuleNode(kind=kind, condition=condition, body=body)

    def _parse_runtime_condition(self) -> str:
        self._skip_whitespace()

        negate = False
        while self._current().is_symbol("!"):
            negate = not negate
            self._advance()
            self._skip_whitespace()

        current = self._current()
        if current.type is not TokenType.FUNCTION or current.value[:-1] != "eval":
            self._error('Expected runtime condition eval("...")', current)
        self._advance()

        expression = self._parse_string_args(current, min_args=1, max_args=1)[0]
        self._skip_whitespace()

        return f"!({expression})" if negate else expression

    def _parse_at_rule(self) -> AtRuleNode:
        keyword = self._advance()
        name = keyword.value[1:]

        params_tokens: List[Token] = []
        while True:
            current = self._current()
            if current.is_symbol(";"):
                self._advance()
                return AtRuleNode(name=name, params=_join_tokens(params_tokens))
            if current.is_symbol("{"):
                break
            if current.type is TokenType.EOF or current.is_symbol("}"):
                self._error(f"Unexpected {_describe(current)} in '@{name}' rule", current)
            params_tokens.append(self._advance())

        params = _join_tokens(params_tokens)
        if name.lower() in self.DECLARATION_AT_RULES:
            return AtRuleNode(
                name=name,
                params=params,
                declarations=self._parse_declaration_block(),
            )

        self._expect_symbol("{")
        rules = self._parse_rule_list(nested=True)
        self._expect_symbol("}")
        return AtRuleNode(name=name, params=params, rules=rules)

    def _parse_ruleset(self) -> RulesetNode:
        start = self._current()
        selectors: List[str] = []
        current_selector: List[Token] = []
        depth = 0

        while True:
            current = self._current()
            if depth == 0 and current.is_symbol("{"):
                break
            if current.type is TokenType.EOF or current.is_symbol(";") or current.is_symbol("}"):
                self._error(f"Unexpected {_describe(current)} in selector", current)

            if current.type is TokenType.FUNCTION or current.is_symbol("("):
                depth += 1
            elif current.is_symbol(")"):
                depth -= 1

            if depth == 0 and current.is_symbol(","):
                selectors.append(_join_tokens(current_selector))
                current_selector = []
                self._advance()
                continue

            current_selector.append(self._advance())

        selectors.append(_join_tokens(current_selector))
        if any(not selector for selector in selectors):
            self._error("Empty selector", start)

        return RulesetNode(selectors=selectors, declarations=self._parse_declaration_block())

    # ======= Объявления =======

    def _parse_declaration_block(self) -> List[DeclarationNode]:
        self._expect_symbol("{")
        declarations: List[DeclarationNode] = []

        while True:
            self._skip_whitespace()
            current = self._current()
            if current.is_symbol("}"):
                self._advance()
                return declarations
            if current.is_symbol(";"):
                self._advance()
                continue
            if current.type is TokenType.AT_KEYWORD:
                self._error(
                    f"'{current.value}' is not allowed inside a declaration block", current
                )
            declarations.append(self._parse_declaration())

    def _parse_declaration(self) -> DeclarationNode:
        name_token = self._current()
        if name_token.type is not TokenType.WORD:
            self._error(f"Expected property name, got {_describe(name_token)}", name_token)
        self._advance()

        self._skip_whitespace()
        self._expect_symbol(":")

        values, important = self._parse_values(closing=("}", ";"))
        if not values:
            self._error(f"Expected value for property '{name_token.value}'", name_token)

        return DeclarationNode(property=name_token.value, values=values, important=important)

    def _parse_values(self, closing: Tuple[str, ...]) -> Tuple[List[ValueNode], bool]:
        """Парсит компоненты значения до одного из закрывающих символов (не потребляя его)."""
        values: List[ValueNode] = []
        important = False

        while True:
            self._skip_whitespace()
            current = self._current()

            if current.type is TokenType.SYMBOL and current.value in closing:
                return values, important
            if current.type is TokenType.EOF:
                self._error("Unexpected end of input in value", current)

            if current.is_symbol("!"):
                self._advance()
                self._skip_whitespace()
                flag = self._current()
                if flag.type is not TokenType.WORD or flag.value.lower() != "important":
                    self._error("Expected 'important' after '!'", flag)
                self._advance()
                important = True
                continue

            if important:
                self._error("Unexpected value after '!important'", current)

            if current.is_symbol(",") or current.is_symbol("/"):
                values.append(OperatorValue(self._advance().value))
            elif current.type in (TokenType.WORD, TokenType.STRING, TokenType.URL):
                values.append(LiteralValue(self._advance().value))
            elif current.type is TokenType.FUNCTION:
                values.append(self._parse_function_value())
            else:
                self._error(f"Unexpected {_describe(current)} in value", current)

    def _parse_function_value(self) -> ValueNode:
        token = self._advance()
        name = token.value[:-1]

        if name == "eval":
            expression = self._parse_string_args(token, min_args=1, max_args=1)[0]
            return RuntimeExpressionValue(expression=expression)

        if name == "value":
            args = self._parse_string_args(token, min_args=1, max_args=3)
            return DotPathValue(
                path=args[0],
                suffix=args[1] if len(args) > 1 else None,
                prefix=args[2] if len(args) > 2 else None,
            )

        args, important = self._parse_values(closing=(")",))
        if important:
            self._error("'!important' is not allowed inside a function", token)
        self._expect_symbol(")")
        return FunctionValue(name=name, args=args)

    def _parse_string_args(self, function: Token, *, min_args: int, max_args: int) -> List[str]:
        """Парсит список строковых аргументов функции после открывающей скобки."""
        args: List[str] = []
        while True:
            self._skip_whitespace()
            current = self._current()
            if current.is_symbol(")") and args:
                self._advance()
                break
            if args:
                self._expect_symbol(",")
                self._skip_whitespace()
                current = self._current()
            if current.type is not TokenType.STRING:
                self._error(f"Expected string argument for '{function.value})'", current)
            args.append(unquote(self._advance().value))

        if not (min_args <= len(args) <= max_args):
            self._error(
                f"'{function.value})' expects {min_args}..{max_args} arguments, got {len(args)}",
                function,
            )
        return args

    # ======= Вспомогательные методы =======

    def _current(self) -> Token:
        return self._tokens[min(self._position, len(self._tokens) - 1)]

    def _advance(self) -> Token:
        current = self._current()
        if current.type is not TokenType.EOF:
            self._position += 1
        return current

    def _skip_whitespace(self) -> None:
        while self._current().type is TokenType.WHITESPACE:
            self._position += 1

    def _expect_symbol(self, symbol: str) -> Token:
        current = self._current()
        if not current.is_symbol(symbol):
            self._error(f"Expected '{symbol}', got {_describe(current)}", current)
        return self._advance()

    @staticmethod
    def _error(message: str, token: Token) -> None:
        raise StylesheetSyntaxError(message, token.line, token.column)


def _describe(token: Token) -> str:
    if token.type is TokenType.EOF:
        return "end of input"
    return f"'{token.value}'"


def _join_tokens(tokens: List[Token]) -> str:
    """Склеивает токены обратно в текст, схлопывая пробелы."""
    return "".join(
        " " if token.type is TokenType.WHITESPACE else token.value
        for token in tokens
    ).strip()


def parse_stylesheet(text: str) -> StylesheetNode:
    """Удобная функция для разбора таблицы стилей из строки."""
    return StylesheetParser().parse(text)


__all__ = ["StylesheetParser", "parse_stylesheet", "unquote"]
