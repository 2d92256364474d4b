"""
Лексер выражений целевого языка.

Выполняет токенизацию скомпилированного выражения:
- Строковые литералы в двойных кавычках
- Числа
- Идентификаторы и ключевые слова (true, false, null)
- Операторы: + ? : ! . , ( ) == != && ||
- Пробелы (игнорируются)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List


@dataclass
class Token:
    """
    Токен выражения.

    Attributes:
        type: Тип токена (STRING, NUMBER, IDENTIFIER, KEYWORD, OPERATOR, EOF)
        value: Значение токена (для строк: исходный текст вместе с кавычками)
        position: Позиция в исходной строке
    """
    type: str
    value: str
    position: int

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', pos={self.position})"


class ExpressionLexer:
    """
    Лексер для разбиения выражения на токены.
    """

    # Спецификация токенов: (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r'\s+', 'WHITESPACE', True),
        (r'"(?:[^"\\\n]|\\.)*"', 'STRING', False),
        (r'\d+(?:\.\d+)?', 'NUMBER', False),
        # Двухсимвольные операторы проверяем раньше односимвольных
        (r'==|!=|&&|\|\|', 'OPERATOR', False),
        (r'[+?:!.,()]', 'OPERATOR', False),
        (r'[A-Za-z_$][\w$]*', 'IDENTIFIER', False),
        (r'.', 'UNKNOWN', False),
    ]

    KEYWORDS = {'true', 'false', 'null'}

    def __init__(self):
        self._compiled_patterns = [
            (re.compile(pattern), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str) -> List[Token]:
        """
        Разбивает строку на токены.

        Returns:
            Список токенов, включая EOF в конце

        Raises:
            ValueError: При обнаружении неизвестного символа
        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if match:
                    break
            else:
                raise ValueError(f"Failed to tokenize at position {position}")

            value = match.group(0)
            if not ignore:
                if token_type == 'UNKNOWN':
                    raise ValueError(f"Unexpected character '{value}' at position {position}")

                final_type = token_type
                if token_type == 'IDENTIFIER' and value in self.KEYWORDS:
                    final_type = 'KEYWORD'

                tokens.append(Token(type=final_type, value=value, position=position))

            position = match.end()

        tokens.append(Token(type='EOF', value='', position=position))
        return tokens


__all__ = ["Token", "ExpressionLexer"]
