from __future__ import annotations

import re

from .parser import fenced_line_mask

_HEAD = re.compile(r"^(?P<indent>[ ]{0,3})(?P<marks>#{1,6})(?P<ws>[ \t]+)")

MIN_LEVEL = 1
MAX_LEVEL = 6


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(MAX_LEVEL, level))


def shift_heading_levels(text: str, offset: int) -> str:
    """
    Сдвигает уровень каждого ATX-заголовка на offset (может быть < 0).
      • результат ограничивается диапазоном [1, 6]
      • строки внутри fenced-блоков не трогаем
      • остальной текст (включая переводы строк) сохраняется как есть
    """
    if offset == 0 or not text:
        return text

    lines = text.splitlines(keepends=True)
    in_fence = fenced_line_mask(lines)
    out: list[str] = []
    for i, ln in enumerate(lines):
        m = None if in_fence[i] else _HEAD.match(ln)
        if m is None:
            out.append(ln)
            continue
        new_level = clamp_level(len(m.group("marks")) + offset)
        out.append(m.group("indent") + "#" * new_level + ln[m.end("marks"):])
    return "".join(out)
