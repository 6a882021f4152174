from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple


@dataclass
class HeadingNode:
    """Узел заголовка в документе."""
    level: int                 # 1..6
    title: str                 # видимый текст заголовка (без '#' и без {…})
    slug: str                  # github-style slug
    start_line: int            # индекс строки заголовка (0-based)
    start_offset: int          # смещение начала строки заголовка в тексте
    end_line_excl: int = -1    # первая строка после поддерева этого заголовка
    end_offset: int = -1       # смещение конца поддерева в тексте
    explicit_id: Optional[str] = None
    classes: FrozenSet[str] = frozenset()

    def has_class(self, name: str) -> bool:
        want = name.lower()
        return any(c.lower() == want for c in self.classes)


@dataclass
class ParsedDoc:
    """
    Результат парсинга Markdown:
      • исходный текст и его строки (с сохранёнными переводами строк);
      • смещения начала каждой строки;
      • список заголовков и их поддеревьев;
      • интервалы fenced-блоков.
    """
    text: str
    lines: List[str]
    line_offsets: List[int]
    headings: List[HeadingNode]
    fenced_ranges: List[Tuple[int, int]]        # [start, end_excl]

    def slice(self, heading: HeadingNode) -> str:
        """Текст поддерева заголовка (включая строку самого заголовка)."""
        return self.text[heading.start_offset:heading.end_offset]
