from __future__ import annotations

import re
from typing import FrozenSet, List, Optional, Tuple

from .model import ParsedDoc, HeadingNode
from .slug import slugify_github

_ATX = re.compile(r"^(?P<indent>[ ]{0,3})(?P<marks>#{1,6})[ \t]+(?P<title>.+?)\s*$")
_ATTRS = re.compile(r"\s*\{(?P<attrs>[^{}]*)\}\s*$")
_ATTR_ITEM = re.compile(r"([#.])([\w\-]+)")
_FENCE = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})")


def _scan_fenced(lines: List[str]) -> List[Tuple[int, int]]:
    """Возвращает интервалы fenced-блоков [start, end_excl]."""
    out: List[Tuple[int, int]] = []
    i = 0
    n = len(lines)
    while i < n:
        m = _FENCE.match(lines[i])
        if not m:
            i += 1
            continue
        open_marks = m.group("fence")              # e.g. "```" or "~~~~"
        tick = open_marks[0]                       # '`' or '~'
        need = len(open_marks)                     # minimal closing length
        # Closing fence: same char, at least `need` times, optional trailing spaces.
        fence_pat = re.compile(rf"^(?: {{0,3}}){re.escape(tick)}{{{need},}}[ \t]*$")
        start = i
        i += 1
        while i < n and not fence_pat.match(lines[i].rstrip("\r\n")):
            i += 1
        if i < n:
            end = i + 1
            out.append((start, end))
            i = end
        else:
            # незакрытый блок: считаем до конца
            out.append((start, n))
            break
    return out


def fenced_line_mask(lines: List[str]) -> List[bool]:
    """Маска строк, попадающих внутрь fenced-блоков (включая сами ограничители)."""
    mask = [False] * len(lines)
    for a, b in _scan_fenced(lines):
        for i in range(a, b):
            mask[i] = True
    return mask


def parse_heading_attrs(raw: Optional[str]) -> Tuple[Optional[str], FrozenSet[str]]:
    """
    Разбор блока атрибутов заголовка `{#id .class key=val}`.
    Последний `#id` побеждает; пары key=value игнорируются.
    """
    hid: Optional[str] = None
    classes: set[str] = set()
    if raw:
        for kind, value in _ATTR_ITEM.findall(raw):
            if kind == "#":
                hid = value
            else:
                classes.add(value)
    return hid, frozenset(classes)


def split_heading_title(raw_title: str) -> Tuple[str, Optional[str]]:
    """Отделяет завершающий блок `{…}` от видимого текста заголовка."""
    m = _ATTRS.search(raw_title)
    if not m:
        return raw_title.strip(), None
    return raw_title[:m.start()].strip(), m.group("attrs")


def parse_markdown(text: str) -> ParsedDoc:
    """
    Лёгкий парсер Markdown:
      • fenced-блоки (``` / ~~~): внутри них заголовки не ищем
      • заголовки ATX (#..######) с необязательным блоком атрибутов {#id .class}
      • границы поддеревьев по правилу «до следующего заголовка уровня <=»
    """
    lines = text.splitlines(keepends=True)
    offsets: List[int] = []
    pos = 0
    for ln in lines:
        offsets.append(pos)
        pos += len(ln)

    fenced = _scan_fenced(lines)
    in_fence = fenced_line_mask(lines)

    headings: List[HeadingNode] = []
    for i, ln in enumerate(lines):
        if in_fence[i]:
            continue
        m = _ATX.match(ln.rstrip("\r\n"))
        if not m:
            continue
        title, attrs = split_heading_title(m.group("title"))
        explicit_id, classes = parse_heading_attrs(attrs)
        headings.append(HeadingNode(
            level=len(m.group("marks")),
            title=title,
            slug=slugify_github(title),
            start_line=i,
            start_offset=offsets[i],
            explicit_id=explicit_id,
            classes=classes,
        ))

    # end: ближайший следующий с уровнем <=, иначе до конца документа
    for i, h in enumerate(headings):
        end_line = len(lines)
        for j in range(i + 1, len(headings)):
            if headings[j].level <= h.level:
                end_line = headings[j].start_line
                break
        h.end_line_excl = end_line
        h.end_offset = offsets[end_line] if end_line < len(lines) else len(text)

    return ParsedDoc(text=text, lines=lines, line_offsets=offsets, headings=headings, fenced_ranges=fenced)
