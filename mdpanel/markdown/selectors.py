from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .model import HeadingNode, ParsedDoc
from .parser import parse_markdown


@dataclass(frozen=True)
class SectionSelector:
    """Что искать: явный id/slug и/или класс заголовка."""
    want_id: Optional[str] = None
    want_class: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.want_id and not self.want_class

    def label(self) -> str:
        """Человекочитаемое имя селектора для диагностик."""
        if self.want_id:
            return self.want_id
        return f".{self.want_class}" if self.want_class else ""


def _id_matcher(want_id: str) -> Callable[[HeadingNode], bool]:
    want = want_id.lower()

    def pred(h: HeadingNode) -> bool:
        if h.explicit_id is not None and h.explicit_id.lower() == want:
            return True
        return h.slug.lower() == want

    return pred


def find_section(doc: ParsedDoc, selector: SectionSelector) -> Optional[HeadingNode]:
    """
    Первый заголовок, совпавший с селектором.

    Совпадение по id (явный id или slug) приоритетнее класса: класс
    проверяется, только если по id не нашлось ни одного заголовка.
    """
    if selector.want_id:
        by_id = _id_matcher(selector.want_id)
        for h in doc.headings:
            if by_id(h):
                return h
    if selector.want_class:
        for h in doc.headings:
            if h.has_class(selector.want_class):
                return h
    return None


def extract_section(
    text: str,
    want_id: Optional[str] = None,
    want_class: Optional[str] = None,
) -> Optional[str]:
    """
    Возвращает блок, которым владеет найденный заголовок: от строки
    заголовка до следующего заголовка того же или более высокого уровня.
    None: раздел не найден.
    """
    selector = SectionSelector(want_id=want_id, want_class=want_class)
    if selector.is_empty():
        return None
    doc = parse_markdown(text)
    heading = find_section(doc, selector)
    if heading is None:
        return None
    return doc.slice(heading)
