"""
Экранирование текста для встраивания в строковый литерал целевого языка.

Целевой язык выражений использует строки в двойных кавычках
с экранированием в стиле C/Java.
"""

from __future__ import annotations

_SIMPLE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def _needs_unicode_escape(ch: str) -> bool:
    code = ord(ch)
    return code < 0x20 or code == 0x7F or code in (0x2028, 0x2029)


def escape_string_literal(text: str) -> str:
    """
    Экранирует произвольный текст для вставки между двойными кавычками.

    Обратная косая черта, кавычка и управляющие символы заменяются
    escape-последовательностями; остальные символы проходят как есть.
    """
    out = []
    for ch in text:
        simple = _SIMPLE_ESCAPES.get(ch)
        if simple is not None:
            out.append(simple)
        elif _needs_unicode_escape(ch):
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return "".join(out)


def quote_string_literal(text: str) -> str:
    """Возвращает готовый строковый литерал: "<escaped-text>"."""
    return f'"{escape_string_literal(text)}"'


_SIMPLE_UNESCAPES = {
    "\\": "\\",
    '"': '"',
    "'": "'",
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "f": "\f",
    "r": "\r",
    "0": "\0",
}


def unescape_string_literal(body: str) -> str:
    """
    Раскрывает escape-последовательности тела строкового литерала (без кавычек).

    Суррогатные пары \\uD83D\\uDE00 собираются в один символ.

    Raises:
        ValueError: При некорректной escape-последовательности
    """
    out = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue

        if i + 1 >= len(body):
            raise ValueError("Dangling backslash in string literal")
        code = body[i + 1]
        if code in _SIMPLE_UNESCAPES:
            out.append(_SIMPLE_UNESCAPES[code])
            i += 2
        elif code == "u":
            digits = body[i + 2:i + 6]
            if len(digits) != 4 or any(d not in "0123456789abcdefABCDEF" for d in digits):
                raise ValueError(f"Invalid unicode escape at position {i}")
            out.append(chr(int(digits, 16)))
            i += 6
        else:
            raise ValueError(f"Invalid escape sequence '\\{code}' at position {i}")

    # Склеиваем суррогатные пары
    return "".join(out).encode("utf-16", "surrogatepass").decode("utf-16")


__all__ = ["escape_string_literal", "quote_string_literal", "unescape_string_literal"]
