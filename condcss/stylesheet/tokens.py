"""
Лексические типы таблицы стилей.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Типы токенов таблицы стилей."""
    WHITESPACE = "WHITESPACE"
    URL = "URL"
    STRING = "STRING"
    AT_KEYWORD = "AT_KEYWORD"
    FUNCTION = "FUNCTION"      # имя функции вместе с открывающей скобкой: rgba(
    SYMBOL = "SYMBOL"
    WORD = "WORD"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.
    """
    type: TokenType
    value: str
    position: int        # Позиция в исходном тексте
    line: int           # Номер строки (начиная с 1)
    column: int         # Номер колонки (начиная с 1)

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"

    def is_symbol(self, value: str) -> bool:
        return self.type is TokenType.SYMBOL and self.value == value


__all__ = ["TokenType", "Token"]
