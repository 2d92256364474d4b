"""
Буфер результирующего выражения.

ExpressionBuilder накапливает выражение как последовательность
типизированных фрагментов. Знание типа соседних фрагментов позволяет не
оставлять в результате мёртвые пустые литералы вида `+ ("")` или `("") + `
без текстовой постобработки готовой строки.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List


class Part(enum.Enum):
    """Типы фрагментов выражения."""
    OPEN = "("              # начало корня или тела @else
    CLOSE = ")"             # конец корня или тела ветки
    THEN = ") ? ("          # между условием и телом ветки
    ELSE = " : "            # между веткой и следующей альтернативой
    GROUP = ") + ("         # разрыв группы конкатенации
    CONCAT = " + "          # обычная конкатенация
    LITERAL = "literal"     # строковый литерал в кавычках
    EMPTY = "empty"         # пустой литерал "" из сброса буфера
    RAW = "raw"             # дословно вставленный текст


# Фрагменты, после которых начинается последовательность конкатенируемых операндов
_OPENERS = {Part.OPEN, Part.THEN}
_SEPARATORS = {Part.GROUP, Part.CONCAT}

EMPTY_LITERAL = '""'


@dataclass(frozen=True)
class Fragment:
    kind: Part
    text: str


class ExpressionBuilder:
    """
    Единственный выходной буфер компилятора.

    Пустой литерал (Part.EMPTY) удерживается до появления следующего
    фрагмента и отбрасывается вместе с соседним разделителем, если он не
    является обязательным операндом:

      • `<разделитель> "" <разделитель|)>`  → убирается литерал и разделитель;
        из двух разделителей сохраняется разрыв группы
      • `<( или ) ? (> "" <разделитель>`    → убирается литерал и разделитель

    Пустой литерал как единственное тело ветки или неявный else сохраняется.
    """

    def __init__(self):
        self._parts: List[Fragment] = []

    def reset(self) -> None:
        self._parts.clear()

    def append(self, kind: Part) -> None:
        """Добавляет структурный фрагмент с фиксированным текстом."""
        self._push(Fragment(kind, kind.value))

    def append_literal(self, quoted: str) -> None:
        """Добавляет строковый литерал в кавычках."""
        kind = Part.EMPTY if quoted == EMPTY_LITERAL else Part.LITERAL
        self._push(Fragment(kind, quoted))

    def append_raw(self, text: str) -> None:
        self._push(Fragment(Part.RAW, text))

    def count(self, kind: Part) -> int:
        return sum(1 for fragment in self._parts if fragment.kind is kind)

    def build(self) -> str:
        return "".join(fragment.text for fragment in self._parts)

    def _push(self, fragment: Fragment) -> None:
        if self._parts and self._parts[-1].kind is Part.EMPTY and len(self._parts) > 1:
            if self._drop_empty_before(fragment):
                return
        self._parts.append(fragment)

    def _drop_empty_before(self, fragment: Fragment) -> bool:
        """
        Пытается отбросить висящий пустой литерал перед новым фрагментом.

        Returns:
            True, если новый фрагмент поглощён и добавлять его не нужно
        """
        previous = self._parts[-2].kind

        if previous in _SEPARATORS and fragment.kind in _SEPARATORS:
            self._parts.pop()
            if previous is Part.CONCAT and fragment.kind is Part.GROUP:
                self._parts[-1] = fragment
            return True

        if previous in _SEPARATORS and fragment.kind is Part.CLOSE:
            self._parts.pop()
            self._parts.pop()
            self._parts.append(fragment)
            return True

        if previous in _OPENERS and fragment.kind in _SEPARATORS:
            self._parts.pop()
            return True

        return False


__all__ = ["Part", "Fragment", "ExpressionBuilder", "EMPTY_LITERAL"]
