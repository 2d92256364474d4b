"""
Лексер таблицы стилей.

Разбивает исходный текст на токены: пробелы, строки, at-ключевые слова,
функции, символы и "слова" (идентификаторы, числа, фрагменты селекторов).
Комментарии /* ... */ отбрасываются.
"""

from __future__ import annotations

import re
from typing import List

from .tokens import Token, TokenType
from ..errors import StylesheetSyntaxError


class StylesheetLexer:
    """
    Лексер для разбиения таблицы стилей на токены.
    """

    # Спецификация токенов: (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r'/\*.*?\*/', None, True),
        (r'\s+', TokenType.WHITESPACE, False),
        # url(...) без кавычек целиком считается литералом
        (r'url\(\s*[^)"\'\s]*\s*\)', TokenType.URL, False),
        (r'"(?:[^"\\\n]|\\.)*"', TokenType.STRING, False),
        (r"'(?:[^'\\\n]|\\.)*'", TokenType.STRING, False),
        (r'@[A-Za-z_-][\w-]*', TokenType.AT_KEYWORD, False),
        (r'-?[A-Za-z_][\w-]*\(', TokenType.FUNCTION, False),
        (r'[{}();:,/!]', TokenType.SYMBOL, False),
        (r'[^\s{}();:,/!"\']+', TokenType.WORD, False),
    ]

    def __init__(self):
        self._compiled_patterns = [
            (re.compile(pattern, re.DOTALL), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str) -> List[Token]:
        """
        Разбивает текст на токены.

        Returns:
            Список токенов, включая EOF в конце

        Raises:
            StylesheetSyntaxError: При незакрытом комментарии/строке
        """
        tokens: List[Token] = []
        position = 0
        line = 1
        column = 1

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if match:
                    break
            else:
                raise StylesheetSyntaxError(
                    f"Unexpected character {text[position]!r}", line, column
                )

            value = match.group(0)
            if token_type is TokenType.SYMBOL and text.startswith("/*", position):
                raise StylesheetSyntaxError("Unterminated comment", line, column)
            if not ignore:
                tokens.append(Token(token_type, value, position, line, column))

            # Обновляем позицию строки/колонки
            newlines = value.count("\n")
            if newlines:
                line += newlines
                column = len(value) - value.rfind("\n")
            else:
                column += len(value)
            position = match.end()

        tokens.append(Token(TokenType.EOF, "", position, line, column))
        return tokens


__all__ = ["StylesheetLexer"]
