from __future__ import annotations

import re

_slug_drop = re.compile(r"[^\w\- ]+")
_slug_ws = re.compile(r"\s+")


def slugify_github(title: str) -> str:
    """
    GitHub-style slug заголовка:
      • lower
      • убрать всё, кроме букв/цифр/'_', пробелов и '-'
      • пробельные серии → один '-'
      • обрезать '-' по краям
    """
    t = title.lower()
    t = _slug_drop.sub("", t)
    t = _slug_ws.sub("-", t)
    return t.strip("-")
