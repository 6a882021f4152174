"""
Markdown-утилиты препроцессора: разбор заголовков, slug, выборка
разделов и сдвиг уровней заголовков.
"""

from __future__ import annotations

from .model import HeadingNode, ParsedDoc
from .normalize import shift_heading_levels
from .parser import parse_markdown
from .selectors import SectionSelector, extract_section, find_section
from .slug import slugify_github

__all__ = [
    "HeadingNode",
    "ParsedDoc",
    "SectionSelector",
    "extract_section",
    "find_section",
    "parse_markdown",
    "shift_heading_levels",
    "slugify_github",
]
