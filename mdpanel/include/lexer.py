"""
Лексический анализ include-директив.

Разбивает текст на последовательность сегментов: обычный текст и
директивы вида

    <!-- @include "<spec>" <key=value>* -->

Сканирование линейное: ищем начало HTML-комментария, проверяем ключевое
слово и кавычки, затем конец комментария. Разбор содержимого директивы
(спецификация пути, атрибуты, опции) выполняется отдельно, в spec.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"
KEYWORD = "@include"


@dataclass(frozen=True)
class TextChunk:
    """Фрагмент текста, переносимый в результат без изменений."""
    text: str
    position: int


@dataclass(frozen=True)
class DirectiveToken:
    """
    Найденная директива с позиционной информацией.
    """
    raw: str             # полный текст директивы, от "<!--" до "-->"
    spec: str            # содержимое кавычек
    options: str         # всё, что между закрывающей кавычкой и "-->"
    position: int        # позиция в исходном тексте
    line: int            # номер строки (начиная с 1)

    def __repr__(self) -> str:
        return f"DirectiveToken({self.spec!r}, {self.options!r}, line={self.line})"


Segment = Union[TextChunk, DirectiveToken]


def _skip_ws(text: str, i: int, end: int) -> int:
    while i < end and text[i].isspace():
        i += 1
    return i


def _match_directive(text: str, start: int) -> Optional[DirectiveToken]:
    """
    Пытается распознать директиву, начинающуюся с "<!--" в позиции start.
    None: это обычный комментарий (или незавершённая конструкция).
    """
    close = text.find(COMMENT_CLOSE, start + len(COMMENT_OPEN))
    if close < 0:
        return None

    i = _skip_ws(text, start + len(COMMENT_OPEN), close)
    if text[i:i + len(KEYWORD)].lower() != KEYWORD:
        return None
    i += len(KEYWORD)
    # после ключевого слова обязателен хотя бы один пробельный символ
    if i >= close or not text[i].isspace():
        return None
    i = _skip_ws(text, i, close)
    if i >= close or text[i] != '"':
        return None

    spec_end = text.find('"', i + 1, close)
    if spec_end < 0 or spec_end == i + 1:
        return None
    spec = text[i + 1:spec_end]
    options = text[spec_end + 1:close]
    # опции не могут содержать '>', иначе это уже другой комментарий
    if ">" in options:
        return None

    end = close + len(COMMENT_CLOSE)
    return DirectiveToken(
        raw=text[start:end],
        spec=spec,
        options=options.strip(),
        position=start,
        line=text.count("\n", 0, start) + 1,
    )


def iter_segments(text: str) -> Iterator[Segment]:
    """
    Генерирует сегменты текста в исходном порядке.
    Конкатенация всех сегментов (TextChunk.text / DirectiveToken.raw)
    в точности восстанавливает исходный текст.
    """
    pos = 0
    cursor = 0
    n = len(text)
    while cursor < n:
        start = text.find(COMMENT_OPEN, cursor)
        if start < 0:
            break
        token = _match_directive(text, start)
        if token is None:
            cursor = start + len(COMMENT_OPEN)
            continue
        if start > pos:
            yield TextChunk(text=text[pos:start], position=pos)
        yield token
        pos = cursor = start + len(token.raw)
    if pos < n:
        yield TextChunk(text=text[pos:], position=pos)


def tokenize(text: str) -> List[Segment]:
    """Список сегментов (см. iter_segments)."""
    return list(iter_segments(text))


__all__ = ["TextChunk", "DirectiveToken", "Segment", "tokenize", "iter_segments"]
